# src/linemarkers/cli.py
import sys
import argparse
import logging
from pathlib import Path

# Module imports
from linemarkers.config import DEFAULT_IGNORE_FILE, FILENAME_MODES
from linemarkers.core.ignore import load_ignore_spec
from linemarkers.core.report import build_report, render_report
from linemarkers.core.tree import IncludeTree

def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Print the include tree of preprocessed C/C++ output (e.g. 'g++ -E'), with line counts per file."
    )
    parser.add_argument(
        "-f", "--file",
        dest="files",
        nargs="+",
        action="extend",
        default=None,
        help="Read from file instead of stdin"
    )
    parser.add_argument(
        "--filename",
        choices=FILENAME_MODES,
        default=None,
        help="Filename print mode. none: never print the filename (default for stdin or a single file). "
             "head: print the filename before the tree (default for multiple files). "
             "line: prefix each result line with the filename."
    )
    parser.add_argument(
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Hide files matching this gitwildmatch pattern, and everything they include"
    )
    parser.add_argument(
        "--ignore-file",
        type=str,
        default=None,
        help=f"File with ignore patterns (default: {DEFAULT_IGNORE_FILE} if present)"
    )
    parser.add_argument("--no-content", action="store_true", help="Do not keep file contents in memory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace the line marker parser")
    return parser

def resolve_filename_mode(requested, files) -> str:
    """Picks the filename print mode when none was given explicitly."""
    if requested is not None:
        return requested
    if files and len(files) > 1:
        return "head"
    return "none"

def print_tree(tree: IncludeTree, ignore_spec, line_prefix: str = ""):
    entries = build_report(tree, ignore_spec)
    sys.stdout.write(render_report(entries, line_prefix))

def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(levelname)s | %(message)s",
            stream=sys.stderr,
        )
        # basicConfig is a no-op when the root logger already has handlers
        logging.getLogger("linemarkers").setLevel(logging.DEBUG if args.verbose else logging.WARNING)

        filename_mode = resolve_filename_mode(args.filename, args.files)
        retain_content = not args.no_content

        # 2. Ignore Rules (Using PathSpec)
        ignore_file = Path(args.ignore_file or DEFAULT_IGNORE_FILE)
        ignore_spec = load_ignore_spec(
            ignore_file,
            extra_patterns=args.ignore,
            warn_missing=args.ignore_file is not None,
        )

        # 3. Stdin
        if not args.files:
            tree = IncludeTree.from_stream(sys.stdin, retain_content=retain_content)
            print_tree(tree, ignore_spec)
            return

        # 4. Files, in the order given
        for file_name in args.files:
            path = Path(file_name)
            if not path.is_file():
                print(f"{file_name} is not a regular file", file=sys.stderr)
                continue

            try:
                with open(path, "r", encoding="utf-8", errors="replace") as f:
                    tree = IncludeTree.from_stream(f, retain_content=retain_content)
            except OSError as e:
                print(f"Cannot read {file_name}: {e}", file=sys.stderr)
                continue

            if filename_mode == "head":
                print(file_name)

            print_tree(tree, ignore_spec, line_prefix=file_name if filename_mode == "line" else "")

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
