from hotel.models import BookingStatus

ALLOWED_TRANSITIONS = {
    BookingStatus.CONFIRMED: {
        BookingStatus.IN_PROGRESS,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    },
    BookingStatus.IN_PROGRESS: {
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    },
}

TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED})


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS.get(current, set())


def is_terminal(status: BookingStatus) -> bool:
    return status in TERMINAL_STATUSES
