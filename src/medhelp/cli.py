"""CLI entrypoint for medhelp: subcommand dispatcher."""

import argparse
import logging
import sys
from pathlib import Path

from medhelp.errors import InputDirectoryNotFoundError, MedhelpError


def _add_shared_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared between assemble and rename subcommands."""
    parser.add_argument("-v", "--verbose", action="store_true", default=False,
                        help="Debug logging (ffmpeg commands, each rename)")


def _add_assemble_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input-dir", default="./input",
                        help="Directory of MP3 voice clips (default: ./input)")
    parser.add_argument("--output-dir", default="./output",
                        help="Output directory (default: ./output)")
    parser.add_argument("--background-file", default="background.mp3",
                        help="Background music file (default: background.mp3)")
    parser.add_argument("--output-name", default="final_output.mp3",
                        help="Final file name inside the output directory "
                             "(default: final_output.mp3)")


def _add_rename_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", type=Path, help="Directory whose files to rename")
    parser.add_argument("-b", "--base", default=None,
                        help="Set base name for files (replaces original filename)")
    parser.add_argument("-p", "--prefix", default="", help="Add prefix to filenames")
    parser.add_argument("-s", "--suffix", default="",
                        help="Add suffix to filenames (before extension)")
    parser.add_argument("-r", "--replace", nargs=2, metavar=("OLD", "NEW"), default=None,
                        help="Replace OLD text with NEW in filenames")
    parser.add_argument("-n", "--number", type=int, default=None, metavar="START",
                        help="Add sequential numbers starting from START")
    parser.add_argument("-a", "--alpha", action="store_true", default=False,
                        help="Use alphabetic sequence instead of numbers (a,b,c...aa,ab,ac...)")
    case = parser.add_mutually_exclusive_group()
    case.add_argument("-l", "--lowercase", action="store_true", default=False,
                      help="Convert filenames to lowercase")
    case.add_argument("-u", "--uppercase", action="store_true", default=False,
                      help="Convert filenames to uppercase")
    parser.add_argument("-d", "--dry-run", action="store_true", default=False,
                        help="Show what would be done without actually renaming")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments with subcommands."""
    parser = argparse.ArgumentParser(
        prog="medhelp",
        description="Guided meditation audio assembler and batch file renamer",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    assemble_parser = subparsers.add_parser(
        "assemble",
        help="Build a meditation track from voice clips",
        description="Normalize voice clips, join them with pauses and "
                    "optionally mix in background music",
    )
    _add_shared_args(assemble_parser)
    _add_assemble_args(assemble_parser)

    rename_parser = subparsers.add_parser(
        "rename",
        help="Batch rename files in a directory",
        description="Rename every file in a directory with prefixes, suffixes, "
                    "replacements and sequence numbers",
        epilog="examples:\n"
               "  medhelp rename -p 'vacation_' -n 1 ./photos\n"
               "  medhelp rename -r 'IMG' 'photo' ./pictures\n"
               "  medhelp rename -b 'clip' -p 'stress_' -a ./input",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_shared_args(rename_parser)
    _add_rename_args(rename_parser)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    return args


def _run_assemble(args: argparse.Namespace) -> None:
    """Run the assemble pipeline."""
    from medhelp.assemble import process
    from medhelp.assemble.collect import collect_input_files
    from medhelp.assemble.durations import format_duration
    from medhelp.assemble.prompts import ask_background_settings, gather_configuration
    from medhelp.audio import FFmpegEngine

    logger = logging.getLogger("medhelp.assemble")
    input_dir = Path(args.input_dir)
    output_dir = Path(args.output_dir)
    background_file = Path(args.background_file)

    logger.info("--- Checking Prerequisites ---")
    engine = FFmpegEngine()
    engine.check_prerequisites()
    if not input_dir.is_dir():
        raise InputDirectoryNotFoundError(input_dir)

    print("\n--- Inside Out Audio Meditation Helper ---")
    print("Press Ctrl+C at any time to exit")
    print(f"Input directory: {input_dir}\nOutput directory: {output_dir}\n")

    background = ask_background_settings(background_file)

    input_files = collect_input_files(input_dir)
    print(f"\nFound {len(input_files)} audio files in input directory (sorted numerically):")
    for i, input_file in enumerate(input_files, 1):
        print(f"{i}. {input_file.name}")

    if len(input_files) > 1:
        print("\n--- Setting Delays Between Clips ---")
        print("Enter delay in seconds between clips (or press Enter for default 2 seconds)")
    config = gather_configuration(
        input_files,
        input_dir=input_dir,
        output_dir=output_dir,
        background_file=background_file,
        output_name=args.output_name,
        background=background,
    )

    result = process(config, input_files, engine)

    print("\n--- Process Complete! ---")
    print(f"Final output file: {result.output_path}")
    print(f"Meditation Duration: {format_duration(result.final_duration)}")


def _run_rename(args: argparse.Namespace) -> None:
    """Run the batch renamer."""
    from medhelp.rename import RenameOptions, apply_renames, plan_renames

    options = RenameOptions(
        base=args.base,
        prefix=args.prefix,
        suffix=args.suffix,
        replace=tuple(args.replace) if args.replace else None,
        start_number=args.number,
        alpha=args.alpha,
        lowercase=args.lowercase,
        uppercase=args.uppercase,
    )
    plan = plan_renames(args.directory, options)
    apply_renames(plan, dry_run=args.dry_run)
    print("File renaming completed!")


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint."""
    args = parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(name)s %(levelname)s: %(message)s")

    try:
        if args.command == "assemble":
            _run_assemble(args)
        elif args.command == "rename":
            _run_rename(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except MedhelpError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
