"""
Word lists and pattern sources shared by the rule catalog and the detectors.

The catalog rewrites with these patterns and the metrics calculator counts
with them, so a family's before/after counts always describe exactly what
was targeted.
"""

import re
from typing import Dict, Iterable, List, Tuple


# ---------------------------------------------------------------------------
# Word lists
# ---------------------------------------------------------------------------

ENTITY_NOUNS = [
    "customer", "client", "user", "buyer", "purchaser", "subscriber", "member",
    "patient", "student", "employee", "vendor", "supplier", "partner",
]

OPERATION_NOUNS = [
    "order", "purchase", "transaction", "sale", "payment", "invoice", "billing",
    "prescription", "enrollment", "assignment", "contract", "agreement",
    "appointment", "reservation", "booking",
]

RESOURCE_NOUNS = [
    "product", "item", "asset", "inventory", "catalog", "sku", "medication",
    "course", "project", "service", "subscription", "plan",
]

RECORD_NOUNS = [
    "account", "profile", "document", "file", "report", "chart", "transcript",
    "history",
]

# Ordered: an identifier carrying several metric words takes the first match.
MONETARY_WORDS: List[Tuple[str, str]] = [
    ("price", "unitValue"),
    ("rate", "ratioValue"),
    ("amount", "numericValue"),
    ("cost", "expenseValue"),
    ("total", "aggregateValue"),
    ("balance", "storedValue"),
    ("salary", "compensationValue"),
    ("wage", "compensationValue"),
    ("revenue", "incomeValue"),
    ("profit", "marginValue"),
    ("discount", "adjustmentValue"),
    ("tax", "feeValue"),
    ("commission", "bonusValue"),
]

COMMENT_KEYWORDS = [
    "business", "proprietary", "confidential", "internal", "secret", "company",
    "competitive", "strategic", "trade secret", "copyright", "trademark",
]

LITERAL_KEYWORDS = [
    "customer", "client", "order", "product", "payment", "invoice", "tax",
    "price", "cost", "revenue", "profit", "business", "company", "proprietary",
    "confidential", "copyright", "trademark",
]

VENDOR_NAMES = [
    "stripe", "paypal", "amazon", "google", "facebook", "twitter", "linkedin",
    "salesforce", "hubspot", "zendesk",
]


# ---------------------------------------------------------------------------
# Canonical placeholders
# ---------------------------------------------------------------------------

PLACEHOLDER_EMAIL = "contact@example.com"
PLACEHOLDER_DOMAIN = "example.com"
PLACEHOLDER_IP = "192.0.2.1"
PHONE_MASK = "15551234567"
CARD_MASK = "1234567890123456"
NATIONAL_ID_MASK = "123456789"

PLACEHOLDER_API_URL = "https://api.example.com/endpoint"
PLACEHOLDER_HOST_URL = "https://host.example.com"
PLACEHOLDER_API_PATH = "/api/v1/endpoint"
PLACEHOLDER_VERSION_PATH = "/v1/endpoint"

PLACEHOLDER_CONSTANTS = {
    "credential": "API_CREDENTIAL",
    "client": "CLIENT_CREDENTIALS",
    "endpoint": "REMOTE_ENDPOINT",
    "vendor": "EXTERNAL_VENDOR_KEY",
    "database": "DATABASE_CONFIG",
    "auth": "AUTH_CONFIG",
}


# ---------------------------------------------------------------------------
# Pattern helpers
# ---------------------------------------------------------------------------

def alternation(words: Iterable[str]) -> str:
    """Regex alternation of literal words, longest first."""
    ordered = sorted(set(words), key=lambda word: (-len(word), word))
    return "|".join(re.escape(word) for word in ordered)


def capitalized(words: Iterable[str]) -> List[str]:
    return [word[:1].upper() + word[1:] for word in words]


def whole_word_pattern(words: Iterable[str], plural: bool = False) -> str:
    """Case-insensitive whole-word pattern; the optional plural is captured as ``plural``."""
    pattern = r"\b(?i:" + alternation(words) + r")"
    if plural:
        pattern += r"(?P<plural>(?i:e?s))?"
    return pattern + r"\b"


def segment_pattern(words: Iterable[str]) -> str:
    """Match words as identifier segments.

    A segment starts where no letter precedes it, or at a lower-to-upper
    camelCase transition, and ends before any lowercase letter. Plural
    forms are accepted.
    """
    return (
        r"(?:(?<![A-Za-z])|(?<=[a-z0-9])(?=[A-Z]))"
        r"(?i:" + alternation(words) + r")(?i:e?s)?(?![a-z])"
    )


def identifier_with_segment(word: str) -> str:
    """Whole identifier containing ``word`` as one of its segments."""
    return r"\b\w*?" + segment_pattern([word]) + r"\w*"


def camel_compound(verbs: Iterable[str], nouns: Iterable[str]) -> str:
    """verbNoun identifiers with any trailing text captured as ``tail``."""
    return (
        r"\b(?i:" + alternation(verbs) + r")"
        r"(?:" + alternation(capitalized(nouns)) + r")s?(?![a-z])"
        r"(?P<tail>\w*)"
    )


def snake_compound(verbs: Iterable[str], nouns: Iterable[str]) -> str:
    """verb_noun identifiers with any trailing text captured as ``tail``."""
    return (
        r"\b(?i:" + alternation(verbs) + r")_"
        r"(?i:" + alternation(nouns) + r")s?(?![A-Za-z0-9])"
        r"(?P<tail>\w*)"
    )


# ---------------------------------------------------------------------------
# Contact and secret patterns
# ---------------------------------------------------------------------------

EMAIL_PATTERN = r"\b[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}\b"
CARD_PATTERN = r"\b\d{4}[- ]?\d{4}[- ]?\d{4}[- ]?\d{4}\b"
NATIONAL_ID_PATTERN = r"\b\d{3}-\d{2}-\d{4}\b"
PHONE_PATTERN = r"(?<![\w+])(?:\+?1[-.\s]?)?(?:\(\d{3}\)|\d{3})[-.\s]?\d{3}[-.\s]?\d{4}\b"
IP_PATTERN = r"\b(?:\d{1,3}\.){3}\d{1,3}\b"
DOMAIN_PATTERN = (
    r"(?<![\w.@/:-])(?!(?:api\.|host\.)?example\.com\b)"
    r"(?:[A-Za-z0-9-]+\.)+(?:com|org|net|io|co\.uk|edu|gov)\b(?!\.\w)"
)

_CONSTANT_PREFIX = r"(?:[A-Z][A-Z0-9]*_)"

SECRET_PATTERNS: Dict[str, str] = {
    "client": (
        r"\b" + _CONSTANT_PREFIX + r"*(?:CLIENT_ID|CLIENT_SECRET|APP_ID|APP_SECRET)\b"
    ),
    "credential": (
        r"\b" + _CONSTANT_PREFIX + r"*(?:API_KEY|ACCESS_KEY|PRIVATE_KEY|SECRET_KEY)\b"
        r"|\b" + _CONSTANT_PREFIX + r"+(?:SECRET|PASSWORD|TOKEN|CREDENTIAL|AUTH)\b"
    ),
    "endpoint": (
        r"\b" + _CONSTANT_PREFIX + r"+(?:URL|URI|ENDPOINT|HOST|DOMAIN|SERVER)\b"
    ),
    "vendor": (
        r"\b(?:" + alternation(name.upper() for name in VENDOR_NAMES) + r")(?:_[A-Z0-9]+)+\b"
    ),
    "database": (
        r"\b(?:DATABASE|MONGODB|POSTGRES|MYSQL|ORACLE|REDIS|MONGO|DB)(?:_[A-Z0-9]+)+\b"
    ),
    "auth": r"\b(?:OAUTH|OIDC|SAML|LDAP|JWT)(?:_[A-Z0-9]+)+\b",
}

# Application order for the secrets category
SECRET_ORDER = ["client", "credential", "endpoint", "vendor", "database", "auth"]


# ---------------------------------------------------------------------------
# Endpoint patterns
# ---------------------------------------------------------------------------

URL_PATTERN = (
    r"https?://(?P<host>[\w.-]+)(?::\d+)?(?:/[\w./%~+-]*)?"
    r"(?:\?[\w=&%.+-]*)?(?:#[\w-]*)?"
)
PUBLIC_TLD_PATTERN = r"\.(?:com|org|net|io|co\.uk|edu|gov|dev|app|ai)$"
API_PATH_PATTERN = r"/api/v\d+/[\w/-]+"
VERSION_PATH_PATTERN = r"/v\d+/[\w/-]+"

RESOURCE_PATHS: List[Tuple[str, List[str], str]] = [
    ("entity_path", ["customers", "users", "clients", "members"], "/api/entities/{id}"),
    ("operation_path", ["orders", "transactions", "purchases", "sales"], "/api/operations/{id}"),
    ("resource_path", ["products", "items", "assets"], "/api/resources/{id}"),
    ("record_path", ["accounts", "profiles"], "/api/records/{id}"),
]


def resource_path_pattern(segments: Iterable[str]) -> str:
    return (
        r"(?<![\w.])(?:/[\w.-]+)*/(?i:" + alternation(segments) + r")\b"
        r"(?:/[\w{}:.-]*)*"
    )


# ---------------------------------------------------------------------------
# Comment and literal patterns
# ---------------------------------------------------------------------------

COMMENT_GUARD = r"\b(?i:" + alternation(COMMENT_KEYWORDS) + r")(?:e?s)?\b"
LITERAL_GUARD = r"\b(?i:" + alternation(LITERAL_KEYWORDS) + r")(?:e?s)?\b"

BLOCK_COMMENT_PATTERN = r"/\*[\s\S]*?\*/"
DOUBLE_DOCSTRING_PATTERN = r'"""[\s\S]*?"""'
SINGLE_DOCSTRING_PATTERN = r"'''[\s\S]*?'''"
# Skips Python floor division: an operand, " // ", then an operand ending the expression.
FLOOR_DIVISION_LOOKAHEAD = r"(?<=[\w)\]] )//[ \t]*[\w.()\[\]]+[ \t]*(?:\n|\Z|#|[-+*/%),\]])"
LINE_COMMENT_PATTERN = r"(?<![:\w'\"])(?!" + FLOOR_DIVISION_LOOKAHEAD + r")//[^\n]*"
HASH_COMMENT_PATTERN = r"(?<![\w/&$'\"])#(?![!{])[^\n]*"

DOUBLE_QUOTED_PATTERN = r'"(?:[^"\\\n]|\\.)*"'
SINGLE_QUOTED_PATTERN = r"'(?:[^'\\\n]|\\.)*'"
TEMPLATE_LITERAL_PATTERN = r"`(?:[^`\\]|\\.)*`"


# ---------------------------------------------------------------------------
# Compound identifier families
# ---------------------------------------------------------------------------

# (name, verbs, nouns, camel replacement, snake replacement)
METHOD_FAMILIES: List[Tuple[str, List[str], List[str], str, str]] = [
    (
        "compute",
        ["calculate", "compute", "process", "generate", "validate", "analyze"],
        ["tax", "price", "rate", "commission", "fee", "cost", "profit", "revenue",
         "discount", "interest", "premium", "salary", "wage", "risk", "credit",
         "loan", "mortgage", "billing", "payment"],
        "computeDerivedValue",
        "compute_derived_value",
    ),
    (
        "fetch",
        ["get", "fetch", "retrieve", "load", "find", "search", "query"],
        ["customer", "user", "order", "product", "payment", "patient", "student",
         "employee", "account", "profile", "invoice", "transaction", "report", "data"],
        "fetchEntity",
        "fetch_entity",
    ),
    (
        "persist",
        ["save", "store", "update", "create", "delete", "modify", "edit", "insert", "upsert"],
        ["customer", "user", "order", "product", "payment", "patient", "student",
         "employee", "account", "profile", "invoice", "transaction", "record"],
        "persistEntity",
        "persist_entity",
    ),
    (
        "communicate",
        ["send", "email", "notify", "alert", "message", "contact", "communicate"],
        ["customer", "user", "patient", "student", "employee", "client", "vendor"],
        "communicateWithEntity",
        "communicate_with_entity",
    ),
    (
        "validate",
        ["validate", "verify", "check", "confirm", "authorize", "authenticate"],
        ["payment", "transaction", "order", "purchase", "account", "identity",
         "credentials", "access"],
        "validateOperation",
        "validate_operation",
    ),
    (
        "execute",
        ["process", "handle", "manage", "execute", "perform"],
        ["transaction", "payment", "order", "purchase", "sale", "billing", "invoice",
         "request", "operation"],
        "executeWorkflowStep",
        "execute_workflow_step",
    ),
]

WORKFLOW_FAMILIES: List[Tuple[str, List[str], List[str], str, str]] = [
    (
        "decision",
        ["approve", "reject", "cancel", "refund", "void", "authorize", "decline"],
        ["payment", "transaction", "order", "request", "application"],
        "processPendingRequest",
        "process_pending_request",
    ),
    (
        "fulfilment",
        ["schedule", "deliver", "ship", "fulfill", "complete", "finalize"],
        ["order", "product", "service", "appointment", "delivery"],
        "executeScheduledStep",
        "execute_scheduled_step",
    ),
    (
        "membership",
        ["subscribe", "unsubscribe", "enroll", "unenroll", "register", "deregister"],
        ["user", "customer", "student", "member", "client"],
        "updateEntityStatus",
        "update_entity_status",
    ),
    (
        "tracking",
        ["track", "monitor", "log", "audit", "report"],
        ["transaction", "payment", "order", "activity", "behavior", "performance"],
        "observeEventStream",
        "observe_event_stream",
    ),
    (
        "outreach",
        ["notify", "alert", "remind", "contact"],
        ["customer", "user", "client", "member", "subscriber"],
        "communicateWithEntity",
        "communicate_with_entity",
    ),
]

_IDENTIFIER_SUFFIXES = ["Id", "ID", "_id", "_ID", "Identifier", "_identifier"]
_DATA_SUFFIXES = [
    "Data", "Info", "Details", "Record", "Object", "Model",
    "_data", "_info", "_details", "_record", "_object", "_model",
]

# (name, prefixes, suffixes, replacement)
PARAMETER_FAMILIES: List[Tuple[str, List[str], List[str], str]] = [
    ("entity_identifier",
     ["customer", "user", "client", "member", "patient", "student", "employee"],
     _IDENTIFIER_SUFFIXES, "entityIdentifier"),
    ("entity_data",
     ["customer", "user", "client", "member", "patient", "student", "employee"],
     _DATA_SUFFIXES, "entityData"),
    ("operation_identifier",
     ["order", "transaction", "purchase", "sale", "payment", "invoice"],
     _IDENTIFIER_SUFFIXES + ["Number", "Num", "_number", "_num"], "operationIdentifier"),
    ("operation_data",
     ["order", "transaction", "purchase", "sale", "payment", "invoice"],
     _DATA_SUFFIXES, "operationData"),
    ("resource_identifier",
     ["product", "item", "asset", "service"],
     _IDENTIFIER_SUFFIXES + ["Code", "SKU", "_code", "_sku"], "resourceIdentifier"),
    ("resource_data",
     ["product", "item", "asset", "service"],
     _DATA_SUFFIXES, "resourceData"),
]


def parameter_pattern(prefixes: Iterable[str], suffixes: Iterable[str]) -> str:
    return r"\b(?i:" + alternation(prefixes) + r")(?:" + alternation(suffixes) + r")\b"


TYPE_KEYWORDS = ["class", "interface", "type", "enum", "struct", "record", "trait"]
ROLE_SUFFIXES = [
    "Service", "Controller", "Repository", "Manager", "Handler", "Processor",
    "Validator", "Factory", "Builder",
]

# (name, type nouns, canonical noun)
TYPE_FAMILIES: List[Tuple[str, List[str], str]] = [
    ("entity",
     ["Customer", "User", "Client", "Member", "Patient", "Student", "Employee",
      "Vendor", "Supplier", "Partner", "Subscriber", "Buyer"],
     "Entity"),
    ("operation",
     ["Order", "Transaction", "Purchase", "Sale", "Payment", "Invoice",
      "Appointment", "Booking", "Reservation"],
     "Operation"),
    ("resource",
     ["Product", "Item", "Asset", "Subscription", "Service", "Inventory", "Catalog"],
     "Resource"),
]


def type_declaration_pattern(nouns: Iterable[str]) -> str:
    return (
        r"\b(?P<kw>" + alternation(TYPE_KEYWORDS) + r")(?P<ws>\s+)"
        r"(?:" + alternation(nouns) + r")(?P<tail>\w*)"
    )


def role_compound_pattern(nouns: Iterable[str]) -> str:
    # Service is both a noun and a role; it only counts as a role here.
    nouns = [noun for noun in nouns if noun != "Service"]
    lowered = [noun[:1].lower() + noun[1:] for noun in nouns]
    return (
        r"\b(?:" + alternation(list(nouns) + lowered) + r")"
        r"(?P<role>" + alternation(ROLE_SUFFIXES) + r")(?P<tail>\w*)"
    )


# ---------------------------------------------------------------------------
# Datastore patterns
# ---------------------------------------------------------------------------

TABLE_SUFFIXES = ["_table", "_db", "_collection", "Table", "DB", "Db", "Collection", "_TABLE", "_DB"]

TABLE_FAMILIES: List[Tuple[str, List[str], str]] = [
    ("entity_table",
     ["customer", "user", "client", "member", "patient", "student", "employee"],
     "entity_table"),
    ("operation_table",
     ["order", "transaction", "purchase", "sale", "payment", "invoice",
      "appointment", "reservation"],
     "operation_table"),
    ("resource_table",
     ["product", "item", "asset", "inventory", "catalog", "service", "subscription"],
     "resource_table"),
]


def table_pattern(nouns: Iterable[str]) -> str:
    return (
        r"\b(?i:" + alternation(nouns) + r")(?i:e?s)?"
        r"(?:" + alternation(TABLE_SUFFIXES) + r")\b"
    )


SQL_PATTERNS: List[Tuple[str, str, str]] = [
    ("select", r"\b(?i:select)\b[^;\n]*?\b(?i:from)\s+[\w.]+", "SELECT data FROM entity_table"),
    ("insert", r"\b(?i:insert\s+into)\s+[\w.]+", "INSERT INTO entity_table"),
    ("update", r"\b(?i:update)\s+[\w.]+\s+(?i:set)\b", "UPDATE entity_table SET"),
    ("delete", r"\b(?i:delete\s+from)\s+[\w.]+", "DELETE FROM entity_table"),
    ("join", r"\bJOIN\s+[\w.]+", "JOIN entity_table"),
]


# ---------------------------------------------------------------------------
# Domain vocabulary clusters (paranoid only)
# ---------------------------------------------------------------------------

DOMAIN_CLUSTERS: List[Tuple[str, List[str]]] = [
    ("core_metric",
     ["roi", "profit_margin", "gross_margin", "ebitda", "ltv", "clv", "arpu",
      "mrr", "arr", "burn_rate", "runway"]),
    ("performance_metric",
     ["conversion_rate", "churn_rate", "cac", "cpa", "cpc", "cpm", "roas"]),
    ("interaction_metric",
     ["engagement", "bounce_rate", "ctr", "session_duration", "page_views"]),
    ("regulated_data",
     ["prescription", "diagnosis", "treatment", "therapy", "medical", "healthcare",
      "hipaa", "phi", "pii"]),
    ("academic_data",
     ["grade", "gpa", "transcript", "enrollment", "tuition", "ferpa", "student_record"]),
    ("financial_data",
     ["trading", "portfolio", "investment", "securities", "compliance", "finra",
      "sec", "aml", "kyc"]),
    ("crm_data",
     ["lead", "prospect", "opportunity", "pipeline", "forecast", "quota", "territory",
      "commission"]),
    ("marketing_data",
     ["campaign", "segment", "persona", "funnel", "attribution", "cohort", "retention"]),
    ("operations_data",
     ["inventory", "warehouse", "fulfillment", "logistics", "supply_chain", "procurement"]),
]


# Every word the business vocabulary family watches for
BUSINESS_VOCABULARY = (
    ENTITY_NOUNS + OPERATION_NOUNS + RESOURCE_NOUNS + RECORD_NOUNS
    + [word for word, _ in MONETARY_WORDS] + COMMENT_KEYWORDS + VENDOR_NAMES
)
