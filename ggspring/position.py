from ggspring.scale import X_AESTHETICS, Y_AESTHETICS


_POSITIONS: dict[str, type] = {}


def register_position(name, cls=None):
    def register(cls):
        cls.name = name
        _POSITIONS[name] = cls
        return cls
    return register(cls) if cls is not None else register


def get_position(position):
    if isinstance(position, Position):
        return position
    if isinstance(position, type) and issubclass(position, Position):
        return position()
    if isinstance(position, str):
        if position not in _POSITIONS:
            raise ValueError(f"Unknown position '{position}', expected one of {', '.join(sorted(_POSITIONS))}")
        return _POSITIONS[position]()
    raise TypeError(f"Expected a position name, Position class or Position instance, got {type(position).__name__}")


class Position:
    name = None

    def compute_layer(self, data, params):
        return data


@register_position("identity")
class PositionIdentity(Position):
    pass


@register_position("nudge")
class PositionNudge(Position):
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y

    def compute_layer(self, data, params):
        shifts = {
            **{aes_name: data[aes_name] + self.x for aes_name in X_AESTHETICS if aes_name in data.columns and self.x != 0},
            **{aes_name: data[aes_name] + self.y for aes_name in Y_AESTHETICS if aes_name in data.columns and self.y != 0},
        }
        return data.assign(**shifts)

    def __repr__(self):
        return f"PositionNudge(x={self.x}, y={self.y})"


def position_identity():
    return PositionIdentity()


def position_nudge(x=0, y=0):
    return PositionNudge(x=x, y=y)
