import jsonpickle
from datetime import datetime, timezone

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def now() -> str:
    return format_time(utc_now())


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds, as the API server stores it."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def iso_datestr_to_datetime(datestr) -> datetime:
    if isinstance(datestr, str) and len(datestr) > 0:
        if datestr[-1] == "Z":
            return datetime.fromisoformat(datestr[:-1] + "+00:00")
        else:
            return datetime.fromisoformat(datestr)
    else:
        raise ValueError("'{}' is not valid iso date format".format(datestr))


def format_time(dt: datetime) -> str:
    """Format a datetime the way metav1.Time serializes (RFC 3339, seconds, UTC)."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


def sort_dict_keys(d):
    """Recursively sort dictionary keys and handle nested structures.

    Args:
        d: Data structure (dict, list, or primitive type)

    Returns:
        Sorted version of the data structure
    """
    if isinstance(d, dict):
        return {
            key: sort_dict_keys(value)
            for key, value in sorted(d.items())
        }
    elif isinstance(d, list):
        return [sort_dict_keys(item) for item in d]
    else:
        return d


def canonicalize_dict(data):
    """
    Returns a canonical JSON representation of a dictionary.

    Keys are sorted recursively so the representation stays stable when key
    order varies. List order is significant and preserved.
    """
    return jsonpickle.dumps(sort_dict_keys(data), unpicklable=False)


def deep_compare_dict(data1, data2) -> bool:
    """Compare two serialized status structures for full structural equality.

    Args:
        data1: First data structure (dict, list, or nested combination)
        data2: Second data structure (dict, list, or nested combination)

    Returns:
        True if data structures are equivalent, False otherwise
    """
    if data1 is None and data2 is None:
        return True
    if data1 is None or data2 is None:
        return False

    if not isinstance(data1, type(data2)) and not isinstance(data2, type(data1)):
        return False

    try:
        return canonicalize_dict(data1) == canonicalize_dict(data2)
    except (TypeError, ValueError):
        return data1 == data2
