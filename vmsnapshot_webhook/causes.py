class FieldPath:
    """
    Path to a field of a submitted object, rendered the way kubernetes
    reports fields in status causes.

    Input:
        FieldPath("spec", "source").child("virtualMachineName")

    Output:
        'spec.source.virtualMachineName'
    """

    def __init__(self, *segments):
        self.__segments = tuple(segments)

    def child(self, *names: str):
        return FieldPath(*self.__segments, *names)

    def index(self, index: int):
        return FieldPath(*self.__segments, index)

    def __str__(self):
        path = ""
        for segment in self.__segments:
            if isinstance(segment, int):
                path += f"[{segment}]"
            else:
                path += f".{segment}" if path else segment
        return path

    def __eq__(self, other):
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


class StatusCause:
    cause_type: str
    message: str
    field: str

    def __init__(self, cause_type: str, message: str, field):
        self.cause_type = cause_type
        self.message = message
        self.field = str(field)

    def to_dict(self):
        return {"type": self.cause_type, "message": self.message, "field": self.field}

    def __eq__(self, other):
        if not isinstance(other, StatusCause):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"StatusCause({self.cause_type!r}, {self.message!r}, {self.field!r})"
