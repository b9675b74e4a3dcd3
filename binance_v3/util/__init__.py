from .enums import Endpoints, ErrorCodes, Interval, Method, OrderSide, OrderStatus, OrderType, Paths, ResponseType, TimeInForce
from .helpers import SAFETY_MARGIN_MS, auto_repr, compute_timestamp_offset, current_millis, decode_envelope, is_error_payload, monotonic_millis, raise_errors_in, to_decimal, to_snake_case
from .mappings import Mappings
from .signature import sign
