import os
from typing import List

import numpy as np

from .errors import InvalidBoardError


def read_input_file(path: str) -> np.ndarray:
    """
    Read a puzzle file and convert it to a grid.
    One row per line, cells separated by commas or spaces, 0 = empty.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    with open(path, 'r') as f:
        lines = f.readlines()

    grid_data = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        if ',' in line:
            row = [int(x.strip()) for x in line.split(',')]
        else:
            row = [int(x) for x in line.split()]
        grid_data.append(row)

    if not grid_data:
        return np.zeros((0, 0), dtype=int)
    for i, row in enumerate(grid_data):
        if len(row) != len(grid_data[0]):
            raise InvalidBoardError(f"{path}: row {i} has {len(row)} cells, expected {len(grid_data[0])}")
    return np.array(grid_data, dtype=int)


def write_output_file(path: str, output: List[List[str]]):
    """Write a rendered grid with each cell quoted."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        for row in output:
            quoted_row = ['"' + cell + '"' for cell in row]
            f.write('[' + ', '.join(quoted_row) + ']\n')
