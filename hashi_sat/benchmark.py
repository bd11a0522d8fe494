"""
Compare encoder variants over a folder of puzzles.
Run as: python -m hashi_sat.benchmark [--input-dir Inputs] [--no-plot]
"""

import argparse
import glob
import os
import time
import tracemalloc

import matplotlib.pyplot as plt
import numpy as np

from .board import normalize_board, parse_board
from .connectivity import is_connected
from .constants import INPUT_DIR
from .errors import HashiError
from .files import read_input_file
from .solver import solve_report

# Format: (Display Name, solve_report keyword arguments)
VARIANTS = [
    # Flow constraints prune most disconnected models, the check catches the rest
    ("Flow + check", dict(use_flow=True, check_connectivity=True)),

    # Only the cut clauses steer the solver towards connected models
    ("Plain + check", dict(use_flow=False, check_connectivity=True)),

    # First model as-is, may be disconnected
    ("Flow only", dict(use_flow=True, check_connectivity=False)),
]


def count_slots(grid) -> int:
    """
    Number of candidate bridges (pairs of connectable islands).
    This, not the number of islands, is what the encoding grows with.
    """
    try:
        return len(parse_board(normalize_board(grid)).slots)
    except HashiError:
        return 0


def run_benchmark(input_dir: str = INPUT_DIR, plot: bool = True):
    input_files = sorted(glob.glob(os.path.join(input_dir, 'input*.txt')))

    if not input_files:
        print(f"No input files found in '{input_dir}'!")
        return {}

    results = {name: {'times': [], 'mems': [], 'rounds': []} for name, _ in VARIANTS}
    file_labels = []

    header = (f"{'File':<15} | {'Islands':<7} | {'Slots(M)':<8} | {'Variant':<15} | "
              f"{'Time (s)':<10} | {'Mem (KB)':<10} | {'Rounds':<6} | {'Status'}")
    print(header)
    print("-" * len(header))

    for file_path in input_files:
        filename = os.path.basename(file_path)

        try:
            grid = read_input_file(file_path)
        except (ValueError, HashiError) as e:
            print(f"Error preparing {filename}: {e}")
            continue

        num_slots = count_slots(grid)
        file_labels.append(f"{filename.replace('.txt', '')}\n(M={num_slots})")

        for name, options in VARIANTS:
            tracemalloc.start()
            start_time = time.perf_counter()
            report = solve_report(grid, **options)
            duration = time.perf_counter() - start_time
            _, peak_mem = tracemalloc.get_traced_memory()
            tracemalloc.stop()

            if report.solved:
                islands = parse_board(normalize_board(grid)).islands
                status = "Success" if is_connected(islands, report.bridges) else "Disconnected"
            else:
                status = report.status

            peak_mem_kb = peak_mem / 1024
            results[name]['times'].append(duration)
            results[name]['mems'].append(peak_mem_kb)
            results[name]['rounds'].append(report.rounds)

            print(f"{filename:<15} | {report.num_islands:<7} | {num_slots:<8} | {name:<15} | "
                  f"{duration:<10.4f} | {peak_mem_kb:<10.2f} | {report.rounds:<6} | {status}")

    if plot and file_labels:
        plot_results(results, file_labels)
    return results


def plot_results(results, file_labels):
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(14, 10))

    # 1. Time Plot
    for name, data in results.items():
        clean_times = [t if t is not None else np.nan for t in data['times']]
        ax1.plot(file_labels, clean_times, marker='o', label=name, linewidth=2)

    ax1.set_title('Execution Time (Log Scale) vs Complexity (M=Slots)')
    ax1.set_ylabel('Time (s)')
    ax1.set_yscale('log')
    ax1.grid(True, which="both", ls="-", alpha=0.3)
    ax1.legend()

    # 2. Memory Plot
    for name, data in results.items():
        clean_mems = [m if m is not None else np.nan for m in data['mems']]
        ax2.plot(file_labels, clean_mems, marker='s', linestyle='--', label=name)

    ax2.set_title('Peak Memory Usage vs Complexity')
    ax2.set_ylabel('Memory (KB)')
    ax2.set_xlabel('Test Cases (M = Candidate Bridges)')
    ax2.grid(True, which="both", ls="-", alpha=0.3)
    ax2.legend()

    plt.tight_layout()
    print("\nDisplaying plot...")
    plt.show()


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark Hashiwokakero encoder variants")
    parser.add_argument("--input-dir", type=str, default=INPUT_DIR, help="Folder with input*.txt puzzles")
    parser.add_argument("--no-plot", action="store_true", help="Only print the table")
    args = parser.parse_args(argv)
    run_benchmark(args.input_dir, plot=not args.no_plot)


if __name__ == "__main__":
    main()
