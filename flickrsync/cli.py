import argparse
import sys
from pathlib import Path
from typing import List, Optional

from flickrsync.config import SETUP_HELP, config_file_path, load_credentials
from flickrsync.exceptions import ConfigError, PreflightError
from flickrsync.flickr_api import FlickrClient
from flickrsync.models import SyncOptions
from flickrsync.syncer import FlickrSync

PROGRAM = "flickrsync"

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM,
        description="Sync folder of photos/videos to Flickr photoset",
    )
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="Do not change anything, just show what should have been synced")
    parser.add_argument("-d", "--download-missing", action="store_true",
                        help="Download photos/videos missing from folder out of the Flickr set")
    parser.add_argument("-r", "--remove", action="store_true",
                        help="Delete photos/videos missing in local folder from Flickr "
                             "(needs delete permission for the app)")
    parser.add_argument("-s", "--sort-by-title", action="store_true",
                        help="Sort photos/videos by title after syncing")
    parser.add_argument("-o", "--set-titles-by-date-taken", action="store_true",
                        help="Set photo titles by date taken (in form YYYYMMDD-HHMMSS)")
    parser.add_argument("folder", nargs="?",
                        help="Folder to sync; the Flickr set has the folder's name")
    return parser


def options_from_args(args: argparse.Namespace) -> SyncOptions:
    return SyncOptions(
        dry_run=args.dry_run,
        remove=args.remove,
        download_missing=args.download_missing,
        sort_by_title=args.sort_by_title,
        set_titles_by_date_taken=args.set_titles_by_date_taken,
    )


def check_folder(folder: Optional[str]) -> Path:
    if not folder:
        raise PreflightError("No folder given")
    path = Path(folder)
    if not path.is_dir():
        raise PreflightError(f"Folder '{folder}' does not exist")
    return path


def main(argv: Optional[List[str]] = None, client_factory=FlickrClient) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help exits with 0, bad options with argparse's 2
        return EXIT_OK if e.code == 0 else EXIT_FAILURE

    try:
        credentials = load_credentials()
    except ConfigError as e:
        print(SETUP_HELP.format(program=PROGRAM, path=config_file_path()), file=sys.stderr)
        print(f"{PROGRAM}: ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        folder = check_folder(args.folder)
    except PreflightError as e:
        if not args.folder:
            parser.print_help()
        print(f"{PROGRAM}: ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    syncer = FlickrSync(client_factory(credentials), folder, options_from_args(args))
    syncer.run()
    return EXIT_OK
