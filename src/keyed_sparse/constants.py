INDEX_DTYPES = ['uint32', 'uint64']
VALUE_DTYPES = ['float64', 'float32']

# returned by get(..., fill_missing=True) for coordinates that were never written
MISSING = None


class FrameColumn:
    ROW = "row"
    COL = "col"
    VALUE = "value"

    REQUIRED = [ROW, COL, VALUE]
