"""pixpass CLI: stylize portraits, render pixel text and generate documents."""

import argparse
import sys
from pathlib import Path

from pixpass.config import DEFAULT_THRESHOLD, PALETTE, Settings
from pixpass.exceptions import PixpassError
from pixpass.logging import audit, get_logger, setup_logging

log = get_logger("cli")


def _output_path(value: str) -> Path:
    path = Path(value)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _template_cache(directory):
    from pixpass.templates import FileTemplateSource, TemplateCache

    if not directory:
        return None
    return TemplateCache(FileTemplateSource(directory))


def cmd_stylize(args):
    """Pixelize a photo into the two-tone portrait."""
    from pixpass.pixelizer import stylize

    png = stylize(Path(args.image).read_bytes(), args.threshold)
    output = _output_path(args.output)
    output.write_bytes(png)
    print(f"Stylized: {output} ({len(png)} bytes, threshold={args.threshold})")


def cmd_validate(args):
    """Check an already pixelized portrait and re-encode it."""
    from pixpass.pixelizer import validate_preprocessed

    png = validate_preprocessed(Path(args.image).read_bytes())
    output = _output_path(args.output)
    output.write_bytes(png)
    print(f"Validated: {output} ({len(png)} bytes)")


def cmd_text(args):
    """Render a string with the pixel font."""
    from pixpass.pixelfont import render_text
    from pixpass.raster import upscale

    img = upscale(render_text(args.text, args.color), args.scale)
    output = _output_path(args.output)
    img.save(output)
    print(f"Rendered: {output} ({img.width}x{img.height})")


def cmd_generate(args, settings: Settings):
    """Generate a complete document."""
    from pixpass.compositor import FieldValues, generate_document

    values = FieldValues(
        name=args.name or "", dob=args.dob or "", sex=args.sex or "",
        city=args.city or "", number=args.number or "", expiry=args.expiry or "",
    )
    templates = _template_cache(args.templates or settings.template_dir)
    png = generate_document(args.country, Path(args.photo).read_bytes(), values, templates)
    output = _output_path(args.output)
    output.write_bytes(png)
    print(f"Generated: {output} ({len(png)} bytes)")


def cmd_countries(args):
    """List the configured country profiles."""
    from pixpass.profiles import PROFILES

    for code, p in PROFILES.items():
        cities = ", ".join(p.allowed_cities)
        print(f"  {code:18s} {p.display_name:18s} photo@{p.photo_anchor}  cities: {cities}")


def cmd_serve(args, settings: Settings):
    """Start the HTTP server."""
    from pixpass.server import create_app

    if args.templates:
        settings.template_dir = Path(args.templates)
    host = args.host or settings.host
    port = args.port or settings.port
    app = create_app(settings)
    print(f"Starting pixpass on http://{host}:{port}")
    app.run(host=host, port=port, debug=args.debug)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pixpass", description="Pixel-art identity document generator")

    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")
    parser.add_argument("--json-logs", action="store_true", help="Log JSON to the console too")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    p_sty = subparsers.add_parser("stylize", help="Pixelize a photo into the two-tone portrait")
    p_sty.add_argument("image", help="Source photo (JPEG, PNG or GIF)")
    p_sty.add_argument("-o", "--output", default="output/photo.png", help="Output PNG path")
    p_sty.add_argument("-t", "--threshold", type=float, default=DEFAULT_THRESHOLD,
                       help="Luminance threshold 0-1 (values outside are clamped)")

    p_val = subparsers.add_parser("validate", help="Validate an already pixelized portrait")
    p_val.add_argument("image", help="Portrait image of the exact photo size")
    p_val.add_argument("-o", "--output", default="output/photo.png", help="Output PNG path")

    p_txt = subparsers.add_parser("text", help="Render text with the pixel font")
    p_txt.add_argument("text", help="Text to render")
    p_txt.add_argument("-o", "--output", default="output/text.png", help="Output PNG path")
    p_txt.add_argument("--color", default=PALETTE.dark, help="Ink colour (#rrggbb)")
    p_txt.add_argument("--scale", type=int, default=1, help="Integer upscale factor")

    p_gen = subparsers.add_parser("generate", help="Generate a document")
    p_gen.add_argument("country", help="Country code, see 'pixpass countries'")
    p_gen.add_argument("photo", help="Stylized portrait PNG")
    p_gen.add_argument("-o", "--output", default="output/passport.png", help="Output PNG path")
    for field_name in ("name", "dob", "sex", "city", "number", "expiry"):
        p_gen.add_argument(f"--{field_name}", default=None)
    p_gen.add_argument("--templates", default=None, help="Directory with passport_<code>.png templates")

    subparsers.add_parser("countries", help="List country profiles")

    p_srv = subparsers.add_parser("serve", help="Start the HTTP server")
    p_srv.add_argument("--host", default=None, help="Bind address")
    p_srv.add_argument("--port", type=int, default=None, help="Port to listen on")
    p_srv.add_argument("--templates", default=None, help="Template directory")
    p_srv.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    level = "DEBUG" if args.verbose else settings.log_level
    setup_logging(level=level, log_file=args.log_file or settings.log_file,
                  json_format=args.json_logs or settings.json_logs)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "stylize": cmd_stylize,
        "validate": cmd_validate,
        "text": cmd_text,
        "generate": lambda a: cmd_generate(a, settings),
        "countries": cmd_countries,
        "serve": lambda a: cmd_serve(a, settings),
    }
    try:
        commands[args.command](args)
    except (PixpassError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
