"""
tablewash command-line interface

Subcommands:

    tablewash clean INPUT OUTPUT [steps...]     Clean and transform a CSV file
    tablewash fill-value INPUT FIELD [...]       Print an interpolation value
    tablewash plot {raw,grouped,box} INPUT [...] Render a chart

Cleaning steps always run in the order trim, headers, scale, range-mean,
fill, whatever order they are given in on the command line.
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import List, Optional, Tuple

import yaml

from .cleaning import DataCleaner, MissingValueImputer
from .transform import range_column_to_mean, scale_column
from .utils import Config, DataLoader, Plotter, configure_logging, get_logger, set_config

logger = get_logger(__name__)


# ===========================================================================
# Argument helpers
# ===========================================================================

def _die(message: str) -> None:
    """Print an error message and exit with status 1."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _parse_scale(text: str) -> Tuple[str, float]:
    """Parse ``COLUMN=FACTOR``."""
    column, sep, factor = text.rpartition("=")
    if not sep or not column:
        raise argparse.ArgumentTypeError(f"expected COLUMN=FACTOR, got '{text}'")
    try:
        value = float(factor)
    except ValueError:
        raise argparse.ArgumentTypeError(f"factor must be a number, got '{factor}'")
    if not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"factor must be finite, got '{factor}'")
    return column, value


def _parse_fill(text: str) -> Tuple[str, str]:
    """Parse ``COLUMN[:MEASURE]``."""
    column, sep, measure = text.partition(":")
    return column, (measure if sep else "average")


# ===========================================================================
# Subcommand handlers
# ===========================================================================

def handle_clean(args: argparse.Namespace) -> None:
    """Load INPUT, apply the requested steps and write OUTPUT."""
    loader = DataLoader()
    cleaner = DataCleaner()
    imputer = MissingValueImputer()

    df = loader.load_csv(args.input)
    steps: List[str] = []

    if args.trim:
        df = cleaner.trim_whitespace(df)
        steps.append("trim")
    if args.headers:
        df = cleaner.normalize_headers(df)
        steps.append("headers")
    for column, factor in args.scale:
        df = scale_column(df, column, factor)
        steps.append(f"scale {column} x{factor:g}")
    for column in args.range_mean:
        df = range_column_to_mean(df, column, args.digits, imputer=imputer)
        steps.append(f"range-mean {column}")
    for column, measure in args.fill:
        value = imputer.compute_fill_value(df, column, measure)
        df = imputer.fill_missing(df, column, value)
        steps.append(f"fill {column}={value}")

    loader.save_csv(df, args.output)
    logger.info("Applied %s", ", ".join(steps) or "no steps")
    print(f"Wrote {len(df)} rows to {args.output}")


def handle_fill_value(args: argparse.Namespace) -> None:
    """Print the floored aggregate of FIELD."""
    df = DataLoader().load_csv(args.input, clean_headers=args.headers)
    print(MissingValueImputer().compute_fill_value(df, args.field, args.measure))


def handle_plot(args: argparse.Namespace) -> None:
    """Render one chart, optionally save it, then show it."""
    if args.no_show:
        import matplotlib
        matplotlib.use("Agg")

    df = DataLoader().load_csv(args.input, clean_headers=args.headers)
    plotter = Plotter(palette=args.palette)

    if args.chart == "raw":
        if not args.x or not args.y:
            _die("raw charts need --x and --y")
        fig = plotter.plot_raw_data(df, args.x, args.y, title=args.title or "Raw Data",
                                    regression=args.regression, color=args.color)
    elif args.chart == "grouped":
        if not args.field:
            _die("grouped charts need --field")
        fig = plotter.plot_grouped_data(df, args.field, top_n=args.top, kind=args.kind,
                                        title=args.title)
    else:
        fig = plotter.plot_boxplot_data(df, fields=args.fields, title=args.title or "Box Plot")

    if args.save:
        path = plotter.save_figure(fig, args.save, args.format)
        print(f"Saved {path}")
    if not args.no_show:
        plotter.show(fig)
    plotter.close(fig)


# ===========================================================================
# Argument parser construction
# ===========================================================================

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="tablewash",
        description="Clean, transform and plot tabular CSV data.",
    )
    parser.add_argument("--config", metavar="PATH", help="YAML configuration file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    # Accepted after the subcommand too. SUPPRESS keeps a subcommand that
    # omits them from resetting values given before it.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", metavar="PATH", default=argparse.SUPPRESS,
                        help="YAML configuration file.")
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS,
                        help="Enable debug logging.")

    subs = parser.add_subparsers(dest="command", metavar="<command>")
    subs.required = True

    # ------------------------------------------------------------------
    # clean
    # ------------------------------------------------------------------
    p_clean = subs.add_parser("clean", parents=[common], help="Clean and transform a CSV file.")
    p_clean.add_argument("input", help="Input CSV file.")
    p_clean.add_argument("output", help="Output CSV file.")
    p_clean.add_argument("--trim", action="store_true", help="Trim whitespace in every cell.")
    p_clean.add_argument("--headers", action="store_true", help="Normalize column names.")
    p_clean.add_argument(
        "--scale", action="append", default=[], type=_parse_scale, metavar="COL=FACTOR",
        help="Multiply the numbers in COL by FACTOR (repeatable).",
    )
    p_clean.add_argument(
        "--range-mean", action="append", default=[], metavar="COL",
        help="Replace 'low-high' ranges in COL with their mean (repeatable).",
    )
    p_clean.add_argument(
        "--digits", type=int, default=None, metavar="N",
        help="Fractional digits kept by --range-mean (default from config).",
    )
    p_clean.add_argument(
        "--fill", action="append", default=[], type=_parse_fill, metavar="COL[:MEASURE]",
        help="Fill missing cells of COL with the floored average/sum/maximum/minimum.",
    )
    p_clean.set_defaults(func=handle_clean)

    # ------------------------------------------------------------------
    # fill-value
    # ------------------------------------------------------------------
    p_fill = subs.add_parser(
        "fill-value", parents=[common], help="Print the interpolation value for a field.",
    )
    p_fill.add_argument("input", help="Input CSV file.")
    p_fill.add_argument("field", help="Numeric field.")
    p_fill.add_argument(
        "--measure", default="average", choices=["average", "sum", "maximum", "minimum"],
    )
    p_fill.add_argument("--headers", action="store_true", help="Normalize column names first.")
    p_fill.set_defaults(func=handle_fill_value)

    # ------------------------------------------------------------------
    # plot
    # ------------------------------------------------------------------
    p_plot = subs.add_parser("plot", parents=[common], help="Render a chart.")
    p_plot.add_argument("chart", choices=["raw", "grouped", "box"])
    p_plot.add_argument("input", help="Input CSV file.")
    p_plot.add_argument("--headers", action="store_true", help="Normalize column names first.")
    p_plot.add_argument("--title")
    p_plot.add_argument("--x", help="X field (raw).")
    p_plot.add_argument("--y", help="Y field (raw).")
    p_plot.add_argument("--regression", action="store_true", help="Draw a regression line (raw).")
    p_plot.add_argument("--color", help="Marker color (raw).")
    p_plot.add_argument("--field", help="Nominal field (grouped).")
    p_plot.add_argument("--top", type=int, default=None, help="Number of categories (grouped).")
    p_plot.add_argument("--kind", default="column", choices=["bar", "column", "pie"])
    p_plot.add_argument("--palette", help="Seaborn palette name.")
    p_plot.add_argument("--fields", nargs="+", help="Fields to box plot (box).")
    p_plot.add_argument("--save", metavar="PATH", help="Save the chart to PATH.")
    p_plot.add_argument("--format", choices=["jpeg", "png", "bmp", "tiff"])
    p_plot.add_argument("--no-show", action="store_true", help="Do not open a window.")
    p_plot.set_defaults(func=handle_plot)

    return parser


# ===========================================================================
# Entry point
# ===========================================================================

def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and dispatch to the subcommand handler."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = Config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        _die("cannot load configuration: " + " ".join(str(exc).split()))
    set_config(config)
    configure_logging("DEBUG" if args.verbose else config.get("logging.level", "INFO"))

    try:
        args.func(args)
    except (KeyError, ValueError, FileNotFoundError) as exc:
        logger.debug("Command failed", exc_info=True)
        _die(exc.args[0] if isinstance(exc, KeyError) and exc.args else str(exc))


if __name__ == "__main__":
    main()
