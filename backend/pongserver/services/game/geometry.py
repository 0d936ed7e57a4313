from pongserver.models import GameObject


def overlaps(a: GameObject, b: GameObject) -> bool:
    """Axis-aligned bounding box test; touching edges do not count."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def is_out_of_vertical_bounds(y: float, object_height: float, board_height: float) -> bool:
    return y < 0 or y + object_height > board_height
