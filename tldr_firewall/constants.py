# tldr_firewall/constants.py
from __future__ import annotations

# Literal marker that makes a shape's text count as a domain object at all.
SENTINEL = "$$"

# Annotation field names (case-sensitive).
FIELD_NAME = "NAME"
FIELD_ADDRESS = "ADDRESS"
FIELD_DESC = "DESC"
FIELD_PORT = "PORT"
FIELD_DIRECTION = "DIRECTION"
FIELD_PURPOSE = "PURPOSE"

# tldraw record discriminators.
TYPE_NAME_SHAPE = "shape"
TYPE_NAME_BINDING = "binding"
SHAPE_GEO = "geo"
SHAPE_ARROW = "arrow"
GEO_RECTANGLE = "rectangle"
RICH_TEXT_DOC = "doc"

TERMINAL_START = "start"
TERMINAL_END = "end"

STATUS_PROCESSED = "처리"
STATUS_UNPROCESSED = "미처리"
STATUS_SCHEDULED = "처리예정"
STATUS_UNKNOWN = "미확인"

# Arrow color -> status label. "black" and anything unlisted map to STATUS_UNKNOWN.
COLOR_TO_STATUS: dict[str, str] = {
    "green": STATUS_PROCESSED,
    "red": STATUS_UNPROCESSED,
    "blue": STATUS_SCHEDULED,
    "black": STATUS_UNKNOWN,
}

CSV_HEADERS: tuple[str, ...] = (
    "Source System",
    "Source Address",
    "Target System",
    "Target Address",
    "Port",
    "Direction",
    "Purpose",
    "Description",
    "Status",
)

DOCUMENT_SUFFIX = ".tldr"
FILENAME_TEMPLATE_DEFAULT = "firewall_rules_{date}.csv"
UTF8_BOM = "\ufeff"

# User-facing messages.
MSG_INVALID_FORMAT = "유효하지 않은 tldr 파일 형식입니다."
MSG_UNEXPECTED = "파일 파싱 중 오류가 발생했습니다."
MSG_WRONG_SUFFIX = "tldr 파일만 업로드할 수 있습니다."
MSG_NO_ROWS = "내보낼 데이터가 없습니다."
