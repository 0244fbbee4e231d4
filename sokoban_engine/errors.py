class MalformedBoard(ValueError):
    """Board string (or serialized snapshot) does not describe a valid puzzle."""


class UnknownBoxIdentity(IndexError):
    """Box id outside [0, number of boxes)."""

    def __init__(self, box_id: int, num_boxes: int) -> None:
        super().__init__(f"Unknown box id: {box_id} (total {num_boxes})")
        self.box_id = box_id
        self.num_boxes = num_boxes
