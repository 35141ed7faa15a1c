#!/usr/bin/env python3
"""
01_import_songs.py - Import songs into the LyricDrill song library.

Reads a YAML file with a `songs:` list (title, artist, lyrics) and stores
each song with its lyrics split into lines of words.

Usage:
  python scripts/01_import_songs.py --input data/sample_songs.yaml
  python scripts/01_import_songs.py --input songs.yaml --db data/lyricdrill.db
  python scripts/01_import_songs.py --input songs.yaml --dry-run
"""

import argparse
import logging
import sys
from pathlib import Path

# Project root for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from lyricdrill.classroom import SongLibrary
from lyricdrill.config import configure_logging, load_settings
from lyricdrill.errors import StorageError
from lyricdrill.utils import load_songs_file

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Import songs into the LyricDrill song library",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="YAML file with a top-level 'songs' list"
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite database (default: LYRICDRILL_DB_PATH or ~/.lyricdrill/lyricdrill.db)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report without writing"
    )

    args = parser.parse_args()

    settings = load_settings(PROJECT_ROOT / ".env")
    configure_logging(settings.log_level)

    logger.info(f"Loading songs from {args.input}...")
    try:
        songs = load_songs_file(args.input)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        sys.exit(1)
    logger.info(f"  Parsed {len(songs)} songs")

    empty = [s["title"] for s in songs if not any(s["lyrics"])]
    if empty:
        logger.warning(f"  {len(empty)} songs have no words and cannot produce lessons: {empty}")

    if args.dry_run:
        for song in songs:
            logger.info(f"  {song['title']} - {song['artist']} ({len(song['lyrics'])} lines)")
        logger.info("Dry run, nothing written.")
        return

    db_path = args.db or settings.db_path
    library = SongLibrary(db_path, timeout=settings.db_timeout)

    imported = 0
    for song in songs:
        try:
            library.add_song(song["title"], song["artist"], song["lyrics"])
            imported += 1
        except StorageError as e:
            logger.error(f"  ✗ Failed: {song['title']}: {e}")

    # Summary
    logger.info("\n" + "=" * 50)
    logger.info("IMPORT COMPLETE")
    logger.info("=" * 50)
    logger.info(f"Database: {db_path}")
    logger.info(f"Imported: {imported}/{len(songs)}")
    logger.info(f"Songs in library: {library.get_song_count()}")

    if imported < len(songs):
        sys.exit(1)


if __name__ == "__main__":
    main()
