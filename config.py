"""
Configuration settings for the query encoder.
"""
import os

from dotenv import load_dotenv

# Pick up overrides from a local .env file, if any
load_dotenv()

# Struct field metadata keys holding the query tag, in lookup order
TAG_NAMES = tuple(
    name.strip()
    for name in os.getenv("QUERY_TAG_NAMES", "query,url").split(",")
    if name.strip()
)

# Sibling metadata keys consulted next to the query tag
LAYOUT_TAG = os.getenv("QUERY_LAYOUT_TAG", "layout")
DELIMITER_TAG = os.getenv("QUERY_DELIMITER_TAG", "del")

# Nested containers deeper than this abort the encode
MAX_DEPTH = int(os.getenv("QUERY_MAX_DEPTH", "32"))

# How nested keys are joined: "brackets" -> a[b], "dots" -> a.b
SCOPE_STYLE = os.getenv("QUERY_SCOPE_STYLE", "brackets").lower()

# Content type assumed when a request or response carries none
DEFAULT_CONTENT_TYPE = os.getenv("DEFAULT_CONTENT_TYPE", "application/json")

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
