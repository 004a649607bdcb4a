from functools import wraps
from inspect import getfullargspec

"""
# examples

@typecheck
def spring(x: Real, n: Integral) -> DataFrame:
    ...

# no error
spring(1, 50)
spring(1.5, n=np.int64(50))

# error
spring("1", 50)
spring(1, n=50.5)
"""


# Arguments without an annotation, and *args/**kwargs, are not checked.
def typecheck(func):
    spec = getfullargspec(func)

    @wraps(func)
    def wrapper(*args, **kwargs):
        for kw, arg in ({k: v for k, v in zip(spec.args, args)} | kwargs).items():
            arg_type = spec.annotations.get(kw)
            if arg_type is None:
                continue
            if (isinstance(arg, bool) and arg_type is not bool) or not isinstance(arg, arg_type):
                raise TypeError(f"{func.__name__}: Argument '{kw}' is of type '{arg_type.__name__}', but got value '{arg}' of type '{type(arg).__name__}'.")
        return func(*args, **kwargs)
    return wrapper
