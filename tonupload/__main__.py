"""
tonupload CLI entry point.

Usage:
    python -m tonupload --mode upload --bucket my_bucket --file movie.mp4
"""
from tonupload.cli import main

if __name__ == "__main__":
    main()
