"""
Constants and default settings for asset optimisation.

This module contains the fixed extension sets used to classify assets, the
default project layout (watched source tree, mirrored output tree and cache
folder), the default encoder tuning for every output format and the status
strings used in log output.
"""

from dotenv import load_dotenv

load_dotenv()

# Folder name constants (relative to the project base directory)
WATCH_FOLDER = "public_dev"
OUTPUT_FOLDER = "public"
CACHE_FOLDER = "opt_cache"

# Run settings
WORKERS = 4

# Accepted asset extensions, one set per category (sets must stay disjoint)
RASTER_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif"}
VECTOR_EXTENSIONS = {".svg"}
AUDIO_EXTENSIONS = {".mp3", ".m4a", ".wav", ".flac", ".opus", ".aac"}
VIDEO_EXTENSIONS = {".mp4", ".mov"}
FONT_TTF_EXTENSIONS = {".ttf"}
FONT_WOFF2_EXTENSIONS = {".woff2"}

# Raster image policy
MAX_IMAGE_DIMENSION = 1440
LOSSLESS_DEPTH = 2  # depth from the project root; 2 is directly inside the watch folder
LOSSLESS_FORMAT = "png"
LOSSY_FORMAT = "avif"
AVIF_QUALITY = 85
AVIF_SPEED = 1
AVIF_SUBSAMPLING = "4:2:0"
PNG_COMPRESS_LEVEL = 9
PNG_COLORS = 256

# Vector policy
SVG_PASSES = 10
SVG_PRECISION = 6  # significant digits; keeps 3 decimals on coordinates below 1000

# Audio policy
AUDIO_CODEC = "libfdk_aac"
AUDIO_PROFILE = "aac_he_v2"
AUDIO_BITRATE = "48k"
AUDIO_CUTOFF = 18000
AUDIO_SAMPLE_RATE = 48000
AUDIO_CHANNELS = 2

# Output extensions
AUDIO_OUTPUT_EXTENSION = ".aac"
VIDEO_OUTPUT_EXTENSION = ".mp4"
VECTOR_OUTPUT_EXTENSION = ".svg"
FONT_OUTPUT_EXTENSION = ".woff2"

# Job status codes
STATUS_OK = "OK"
STATUS_COPY = "COPY"
STATUS_FAIL = "FAIL"
STATUS_SKIP = "SKIP"
