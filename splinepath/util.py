import json
import math
import numpy

def compensated_cumsum(values, start=0.0):
    """Return the running sums of values, accumulated with Kahan summation.

    Parameters:
    values: 1-d sequence of n floats.
    start: initial value of the sum.

    Returns an array of shape (n+1,) whose i-th entry is start plus the sum of
    the first i values (so the first entry is start and the last is the total).
    """
    values = numpy.asarray(values, dtype=float)
    sums = numpy.empty(len(values) + 1, dtype=float)
    total = float(start)
    compensation = 0.0
    sums[0] = total
    for i, value in enumerate(values):
        y = value - compensation
        t = total + y
        compensation = (t - total) - y
        total = t
        sums[i+1] = total
    return sums

def compensated_sum(values):
    """Return an accurately rounded sum of values (see math.fsum)."""
    return math.fsum(values)

class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that is smart about converting iterators and numpy arrays to
    lists, and converting numpy scalars to python scalars.
    """
    def default(self, o):
        try:
            return super().default(o)
        except TypeError as x:
            if isinstance(o, numpy.generic):
                item = o.item()
                if isinstance(item, numpy.generic):
                    raise x
                else:
                    return item
            try:
                return list(o)
            except TypeError:
                raise x


_READABLE_ENCODER = _NumpyEncoder(indent=4, sort_keys=True)

def json_encode_legible_to_str(data):
    """Encode nicely-formatted JSON to a string."""
    return _READABLE_ENCODER.encode(data)

def json_encode_legible_to_file(data, f):
    """Encode nicely-formatted JSON to an open file handle."""
    for chunk in _READABLE_ENCODER.iterencode(data):
        f.write(chunk)
