"""
Command line interface for heatplot.
"""

import argparse
import time
from typing import List, Optional

from . import __version__
from .config import (
    DEFAULT_HEAT_COLOUR_COUNT,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_POINT_SIZE,
    DEFAULT_RANDOM_FOOTER,
    DEFAULT_RANDOM_TIME_UPPER,
    DEFAULT_SCALE,
    DEFAULT_SIZE,
    DEFAULT_SPEED_MS,
    DEFAULT_TIME_LOWER,
    DEFAULT_TIME_UPPER,
    RenderConfig,
)
from .errors import HeatPlotError, ParseError
from .functions import DOUBLE_FUNCTION_NAMES, FUNCTION_NAMES, SINGLE_FUNCTION_NAMES
from .generator import RandomEquationGenerator, find_interesting_equation
from .parser import parse_equation
from .render import render_equation, render_plots
from .symbolic import SymbolicEngine


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heatplot",
        description=f"heatplot v{__version__} - animated heat maps of implicit equations in X, Y and T",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render an equation; T animates it when used
  heatplot "y / 4 = x * (x + 2)"

  # Expanding circle, written to a custom file
  heatplot "T = Y ^ 2 + X ^ 2" --output-file circle.gif

  # Let the program find an interesting random equation
  heatplot --random --seed 42

  # List the functions equations may call
  heatplot --list-functions
        """
    )

    parser.add_argument("formula", nargs="?", help="Equation using x, y and t (t for time)")
    parser.add_argument("--random", action="store_true", help="Render a randomly generated equation")
    parser.add_argument("--seed", type=int, help="Seed for --random (default: current time)")
    parser.add_argument("--attempts", type=int, default=1000,
                        help="Random equations to try before giving up (default: 1000)")
    parser.add_argument("--list-functions", action="store_true", help="Print the callable function names")
    parser.add_argument("--simplify", action="store_true", help="Render the simplified equation")
    parser.add_argument("--latex", action="store_true", help="Print the residual as LaTeX")
    parser.add_argument("--verbose", action="store_true", help="Report rejected random equations")

    parser.add_argument("--hcc", type=int, default=DEFAULT_HEAT_COLOUR_COUNT,
                        help="Heat colour buckets on each side of zero, at most 126 (default: 126)")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED_MS,
                        help="Milliseconds between frames (default: 100)")
    parser.add_argument("--point-size", type=float, default=DEFAULT_POINT_SIZE,
                        help="How many x or y units one unscaled pixel covers (default: 0.1)")
    parser.add_argument("--scale", type=int, default=DEFAULT_SCALE,
                        help="Magnification of the picture (default: 2)")
    parser.add_argument("--tlb", type=int, default=DEFAULT_TIME_LOWER, help="Where to start T (default: 0)")
    parser.add_argument("--tub", type=int,
                        help=f"Where to end T (default: {DEFAULT_TIME_UPPER}, "
                             f"{DEFAULT_RANDOM_TIME_UPPER} with --random)")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE,
                        help="Grid cells in each direction from the origin (default: 100)")
    parser.add_argument("--output-file", type=str, default=DEFAULT_OUTPUT_FILE,
                        help="The output filename (default: ./out.gif)")
    parser.add_argument("--footer-text", type=str,
                        help=f"Text to put at the bottom of the picture (default: empty, "
                             f"'{DEFAULT_RANDOM_FOOTER}' with --random)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    values = dict(
        heat_colour_count=args.hcc,
        speed_ms=args.speed,
        point_size=args.point_size,
        scale=args.scale,
        time_lower=args.tlb,
        size=args.size,
        output_file=args.output_file,
    )
    if args.tub is not None:
        values["time_upper"] = args.tub
    if args.footer_text is not None:
        values["footer_text"] = args.footer_text
    config = RenderConfig.for_random(**values) if args.random else RenderConfig(**values)
    config.validate()
    return config


def list_functions():
    print("Function Names: ")
    for name in FUNCTION_NAMES:
        print(name)
    print("Single Functions: ")
    for name in SINGLE_FUNCTION_NAMES:
        print(name.upper())
    print("Double Functions: ")
    for name in DOUBLE_FUNCTION_NAMES:
        print(name.upper())


def run_formula(formula: str, config: RenderConfig, simplify: bool, latex: bool) -> int:
    equation = parse_equation(formula)
    if simplify:
        equation = equation.simplify()
        print(f"Simplified: {equation.to_text()}")
    if latex:
        print(SymbolicEngine().latex(equation))

    if not render_equation(equation, config):
        print(f"Rendering failed for {formula}")
        return 1
    print(f"Done see {config.output_file}")
    return 0


def run_random(config: RenderConfig, seed: Optional[int], attempts: int, latex: bool, verbose: bool) -> int:
    if seed is None:
        seed = time.time_ns()
    generator = RandomEquationGenerator(seed)
    result = find_interesting_equation(
        generator, config.grid_rect, config.time_lower, config.time_upper,
        config.point_size, max_attempts=attempts, verbose=verbose
    )
    text = result.equation.to_text()
    print(f"Got function: {result.original_text}")
    if text != result.original_text:
        print(f"Got simplified function: {text}")
    print(f"looks good making image (attempt {result.attempts})")
    if latex:
        print(SymbolicEngine().latex(result.equation))

    written = render_plots(
        result.plots, text, config.output_file,
        bucket_count=config.heat_colour_count,
        scale=config.scale,
        speed_ms=config.speed_ms,
        time_upper=config.time_upper,
        time_used=result.time_used,
        footer_text=f"{config.footer_text} seed: {seed}",
    )
    if not written:
        return 1
    print(f"Done see {config.output_file}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point; returns the process exit status"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_functions:
        list_functions()
        return 0

    try:
        config = config_from_args(args)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    try:
        if args.random:
            return run_random(config, args.seed, args.attempts, args.latex, args.verbose)
        if args.formula:
            return run_formula(args.formula, config, args.simplify, args.latex)
    except ParseError as e:
        print(f"Error: {e}")
        return 1
    except (HeatPlotError, RuntimeError) as e:
        print(f"Failed: {e}")
        return 1

    print("Please include the formula after the command; you can use x, y and t (t for time) in any way you wish")
    parser.print_help()
    return 0
