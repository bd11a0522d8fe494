"""
CLI entry point. Run as: python -m hashi_sat [input-file]
"""

import argparse
import logging
import os
import sys
import time

from .constants import ASCII_GLYPHS, DEFAULT_SOLVER, INPUT_DIR, OUTPUT_DIR, UNICODE_GLYPHS
from .errors import HashiError
from .files import read_input_file, write_output_file
from .render import render_grid
from .solver import INVALID, solve_report


def resolve_input_path(filename: str) -> str:
    """Use the path as given if it exists, otherwise look in the inputs folder."""
    if os.path.exists(filename):
        return filename
    return os.path.join(INPUT_DIR, filename)


def default_output_path(input_path: str) -> str:
    name = os.path.basename(input_path).replace('input', 'output')
    return os.path.join(OUTPUT_DIR, name)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Hashiwokakero solver (SAT)")
    parser.add_argument("input", nargs="?", default=None,
                        help=f"Puzzle file; looked up in {INPUT_DIR}/ if not found (prompted if omitted)")
    parser.add_argument("--output", type=str, default=None,
                        help=f"Where to write the solution (default: {OUTPUT_DIR}/<input name>)")
    parser.add_argument("--ascii", action="store_true", help="Print with the ASCII symbols of the output file")
    parser.add_argument("--no-flow", action="store_true", help="Leave out the directional flow constraints")
    parser.add_argument("--no-connectivity-check", action="store_true",
                        help="Accept the first SAT model even if it is disconnected")
    parser.add_argument("--solver", type=str, default=DEFAULT_SOLVER, help="PySAT solver name")
    parser.add_argument("--max-rounds", type=int, default=None, help="Max SAT calls for the connectivity check")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print("=" * 60)
    print("Hashiwokakero Solver")
    print("=" * 60)

    filename = args.input
    if filename is None:
        filename = input("Enter input filename (e.g., input-01.txt): ").strip()

    try:
        input_path = resolve_input_path(filename)
        grid = read_input_file(input_path)
    except (FileNotFoundError, ValueError, HashiError) as e:
        print(f"\nError: {e}")
        return 2

    print(f"\nLoaded grid from {input_path}:")
    print(grid)

    start = time.time()
    report = solve_report(grid,
                          use_flow=not args.no_flow,
                          check_connectivity=not args.no_connectivity_check,
                          solver_name=args.solver,
                          max_rounds=args.max_rounds)
    elapsed_ms = (time.time() - start) * 1000

    if report.status == INVALID:
        print(f"\nError: {report.message}")
        return 2

    if not report.solved:
        print(f"\n✗ No solution found (time = {elapsed_ms:.2f} ms)")
        if report.message:
            print(f"  {report.message}")
        return 1

    print(f"\n✓ Solution found! (time = {elapsed_ms:.2f} ms, {report.rounds} SAT call(s), "
          f"{report.num_vars} vars, {report.num_clauses} clauses)")

    glyphs = ASCII_GLYPHS if args.ascii else UNICODE_GLYPHS
    print("\nSolution grid:")
    for row in render_grid(grid, report.bridges, glyphs):
        print(' '.join(row))

    output_path = args.output or default_output_path(input_path)
    write_output_file(output_path, render_grid(grid, report.bridges, ASCII_GLYPHS))
    print(f"\nOutput written to: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
