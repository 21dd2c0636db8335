"""
Constants shared across the record tools.
"""

# Maximum characters in a single tool response before truncation.
CHARACTER_LIMIT = 25_000

# Lower than the Directory's own default of 100 to keep responses small.
DEFAULT_PER_PAGE = 50
MAX_PER_PAGE = 5000

DEFAULT_SAMPLE_SIZE = 5
MIN_SAMPLE_SIZE = 1
MAX_SAMPLE_SIZE = 50

# Paginated listings attach a zone summary above this many records.
SUMMARY_THRESHOLD = 20

# Paginated fetches stop after max(page * per_page + 1, per_page * FETCH_CAP_FACTOR).
FETCH_CAP_FACTOR = 10
DEFAULT_FETCH_PAGE_SIZE = 100

MAX_BULK_RECORDS = 100
MAX_COMMENT_LENGTH = 100

# The Directory reports ttl == 1 for "automatic".
AUTO_TTL = 1
AUTO_TTL_MARKER = "auto"

UNKNOWN_TYPE = "UNKNOWN"

DNS_RECORD_TYPES = (
    "A",
    "AAAA",
    "CAA",
    "CERT",
    "CNAME",
    "DNSKEY",
    "DS",
    "HTTPS",
    "LOC",
    "MX",
    "NAPTR",
    "NS",
    "PTR",
    "SMIMEA",
    "SRV",
    "SSHFP",
    "SVCB",
    "TLSA",
    "TXT",
    "URI",
)

PROXIABLE_TYPES = ("A", "AAAA", "CNAME")

SORT_FIELDS = ("type", "name", "content", "ttl", "proxied")

ZONE_STATUSES = (
    "active",
    "pending",
    "initializing",
    "moved",
    "deleted",
    "deactivated",
)

TRUNCATION_NOTICE = (
    "\n\n--- TRUNCATED ---\n"
    "Response exceeded the size limit. Use `page`, `per_page`, or filter "
    "parameters (filter_type, filter_name) to narrow results."
)

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"
DEFAULT_TIMEOUT = 30
