from typing import Union, Literal
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

FLOAT_ARRAY = np.typing.NDArray[np.floating]
ARRAY_LIKE = npt.ArrayLike
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]

FLOAT_DTYPE = Union[type[np.float32], type[np.float64], np.dtype, type[float], str]

DatetimeLike = Union[datetime, Timestamp]

INTERPOLATION_METHODS = Literal['lerp', 'nlerp', 'slerp']
