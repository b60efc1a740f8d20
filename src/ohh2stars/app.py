import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import Settings, load_settings
from .converter import convert, convert_file
from .errors import OhhError
from .watcher.file_watcher import FileWatcher


def configure_logging(settings: Settings):
    logger.enable("ohh2stars")
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    if settings.log_file:
        logger.add(settings.log_file, level=settings.log_level)


def write_converted(source: Path, text: str, settings: Settings) -> Path:
    out_path = settings.output_path_for(source)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding='utf-8')
    logger.info(f"Wrote {out_path}")
    return out_path


def convert_directory(in_dir: Path, settings: Settings) -> int:
    files = sorted(p for p in in_dir.iterdir() if p.is_file() and settings.wants(p))
    if not files:
        logger.error(f"No hand history files in {in_dir}")
        return 1

    converted = 0
    for f in files:
        try:
            write_converted(f, convert_file(f), settings)
            converted += 1
        except (OhhError, OSError) as e:
            logger.error(f"Skipping {f.name}: {e}")

    logger.info(f"Converted {converted} of {len(files)} files")
    return 0 if converted else 1


def watch_directory(in_dir: Path, settings: Settings):
    def on_new_file(path: Path, text: str):
        try:
            write_converted(path, convert(text), settings)
        except (OhhError, OSError) as e:
            logger.error(f"Failed to convert {path.name}: {e}")

    watcher = FileWatcher(in_dir, on_new_file, file_filter=settings.wants, poll_interval=settings.poll_interval)
    watcher.run_forever()


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ohh2stars",
        description="Convert Open Hand History (OHH) files to PokerStars hand-history text.",
    )
    ap.add_argument("input", help="OHH file, or a directory of OHH files")
    ap.add_argument("--output", "-o", help="Output file (single file input) or directory (directory input)")
    ap.add_argument("--config", help="JSON settings file")
    ap.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    ap.add_argument("--watch", action="store_true", help="Keep watching the input directory for new files")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    in_path = Path(args.input)
    is_dir = in_path.is_dir()
    try:
        settings = load_settings(args.config).with_overrides(
            log_level=args.log_level,
            output_dir=args.output if is_dir else None,
        )
    except OhhError as e:
        print(f"ohh2stars: {e}", file=sys.stderr)
        return 2

    try:
        configure_logging(settings)
    except ValueError as e:
        print(f"ohh2stars: {e}", file=sys.stderr)
        return 2

    if args.watch:
        if not is_dir:
            logger.error("--watch needs a directory")
            return 2
        watch_directory(in_path, settings)
        return 0

    if is_dir:
        return convert_directory(in_path, settings)

    try:
        result = convert_file(in_path)
    except OhhError as e:
        logger.error(str(e))
        return 1

    if args.output:
        try:
            Path(args.output).write_text(result, encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write {args.output}: {e}")
            return 1
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(result + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
