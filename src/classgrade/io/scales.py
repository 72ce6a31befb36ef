"""Read and write grading scales.

A scale file is a simple CSV with no headers. Each row describes one range:
the letter grade, the minimum and maximum percentages, the GPA value, and
optionally a display color. The order of the rows is kept when writing, but
does not matter when reading.

"""

import csv
import pathlib as _pathlib
from typing import Union

from ..exceptions import ConfigurationError
from ..scales import GradeRange, GradingScale


def write(path: Union[str, _pathlib.Path], scale: GradingScale):
    """Writes a grading scale to disk.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale will be written.
    scale : GradingScale
        The scale. Its id and name are not written.

    """
    path = _pathlib.Path(path)

    with path.open("w", newline="") as fileobj:
        writer = csv.writer(fileobj)
        for r in scale.ranges:
            row = [r.letter, r.min, r.max, r.gpa]
            if r.color is not None:
                row.append(r.color)
            writer.writerow(row)


def read(
    path: Union[str, _pathlib.Path], id: str = "custom", name: str = "Custom Scale"
) -> GradingScale:
    """Reads a grading scale from the file.

    Parameters
    ----------
    path : pathlib.Path or str
        The path where the scale is stored.
    id : str
        The id given to the scale. Default: "custom".
    name : str
        The name given to the scale. Default: "Custom Scale".

    Returns
    -------
    GradingScale

    Raises
    ------
    ConfigurationError
        If a row is malformed, or the ranges do not form a valid scale.

    """
    path = _pathlib.Path(path)

    with path.open(newline="") as fileobj:
        rows = [row for row in csv.reader(fileobj) if row]

    def parse_row(lineno, row):
        if len(row) not in (4, 5):
            raise ConfigurationError(
                f"{path}:{lineno}: expected 4 or 5 fields, got {len(row)}.",
                scale_id=id,
            )
        letter, minimum, maximum, gpa = row[:4]
        color = row[4] if len(row) == 5 else None
        try:
            return GradeRange(float(minimum), float(maximum), letter, float(gpa), color)
        except ValueError:
            raise ConfigurationError(
                f"{path}:{lineno}: bounds and GPA must be numbers.", scale_id=id
            ) from None

    ranges = [parse_row(i, row) for i, row in enumerate(rows, start=1)]
    return GradingScale(ranges, id=id, name=name)
