import sys
import argparse
import logging
from pathlib import Path

from cutout_editor.core.editor_session import CutoutSession
from cutout_editor.core.editor_tools import SegmentMode
from cutout_editor.core.image_handler import save_png
from cutout_editor.core.shapes import find_seeds
from cutout_editor.core.transparency import to_debug_image
from cutout_editor.utils.config import AppConfig
from cutout_editor.utils.helpers import parse_path, parse_point, parse_rect
from cutout_editor.utils.validators import InvalidInputError

logger = logging.getLogger(__name__)


def run_cli_single(args, config: AppConfig):
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Input file not found: {input_path}")
        sys.exit(1)

    session = CutoutSession(on_status=logger.info, tolerance=args.tolerance, config=config)
    try:
        session.open_file(input_path)
    except (OSError, ValueError) as e:
        print(f"Error: Failed to load image: {e}")
        sys.exit(1)

    if args.list_seeds:
        for x, y in find_seeds(session.original):
            print(f"{x},{y}")
        return

    if not args.output:
        print("Error: --output is required unless --list-seeds is given.")
        sys.exit(1)

    try:
        rect = parse_rect(args.rect) if args.rect else None
        seed = parse_point(args.seed) if args.seed else None
        path = parse_path(args.path) if args.path else None
        session.run(SegmentMode(args.mode), rect=rect, seed=seed, path=path)
        session.save(args.output)
        if args.mask_output and session.last_mask is not None:
            save_png(to_debug_image(session.last_mask), args.mask_output)
            print(f"Saved mask preview: {args.mask_output}")
    except InvalidInputError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: Failed to process image: {e}")
        sys.exit(1)

    print(f"Saved {args.output}")


def run_cli_batch(args, config: AppConfig):
    in_dir = Path(args.input_dir)
    out_dir = Path(args.out_dir) if args.out_dir else in_dir / "cutout_output"
    pattern = args.pattern or "*.png"
    if not in_dir.exists():
        print(f"Error: Input directory not found: {in_dir}")
        sys.exit(1)
    out_dir.mkdir(parents=True, exist_ok=True)

    session = CutoutSession(on_status=logger.debug, tolerance=args.tolerance, config=config)
    count = 0
    for path in sorted(in_dir.rglob(pattern)):
        if not path.is_file() or out_dir in path.parents:
            continue
        try:
            session.open_file(path)
        except (OSError, ValueError) as e:
            print(f"[SKIP] {path.name}: {e}")
            continue

        out_png = out_dir / f"{path.stem}.png"
        try:
            session.remove_background()
            session.save(out_png)
            print(f"[OK] {path.name} -> {out_png.name}")
            count += 1
        except (OSError, ValueError) as e:
            print(f"[FAIL] {path.name}: {e}")
    print(f"Batch complete. {count} images cut out to {out_dir}")


def run_cli_recent(config: AppConfig):
    if not config.recent_files:
        print("No recent files")
        return
    for entry in config.recent_files:
        print(entry)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Flood-fill background remover and cut-out tool")
    parser.add_argument("--input", type=str, help="Input image path")
    parser.add_argument("--output", type=str, help="Output PNG path (with alpha)")
    parser.add_argument("--mode", type=str, default=SegmentMode.BACKGROUND.value,
                        choices=[m.value for m in SegmentMode],
                        help="background: flood fill from the corners; seed: keep the region at --seed; "
                             "shape: cut along --path; detect: keep regions found by the contrast scan")
    parser.add_argument("--tolerance", type=int, default=None,
                        help="Color tolerance 0-200 (default: from config, initially 60)")
    parser.add_argument("--seed", type=str, help="Seed point x,y for seed mode")
    parser.add_argument("--path", type=str, help="Closed outline 'x,y;x,y;x,y' for shape mode")
    parser.add_argument("--rect", type=str, help="Only apply the cut inside x,y,w,h")
    parser.add_argument("--mask-output", type=str, help="Also save a red/green mask preview PNG")
    parser.add_argument("--list-seeds", action="store_true", help="Print detected shape seeds and exit")

    # Batch mode
    parser.add_argument("--input-dir", type=str, help="Input directory for batch background removal")
    parser.add_argument("--pattern", type=str, help="Glob pattern for input (e.g., '*.jpg')")
    parser.add_argument("--out-dir", type=str, help="Output directory for batch output")

    parser.add_argument("--recent", action="store_true", help="List recently opened files")
    parser.add_argument("--clear-recent", action="store_true", help="Forget recently opened files")
    parser.add_argument("--config", type=str, help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = AppConfig(Path(args.config) if args.config else None)
    if args.tolerance is None:
        args.tolerance = config.tolerance

    if args.clear_recent:
        config.clear_recent()
        config.save()
        print("Recent files cleared")
        return
    if args.recent:
        run_cli_recent(config)
        return
    if args.input_dir:
        run_cli_batch(args, config)
        config.save()
        return
    if not args.input:
        parser.error("--input is required (or use --input-dir for batch mode)")
    run_cli_single(args, config)
    config.save()


if __name__ == "__main__":
    main()
