"""String-level redaction helpers.

Pattern-driven redaction of free text (emails, long quoted spans) and the
two structural extractors used for breadcrumbs: data-store table names and
query-string stripping.
"""

from __future__ import annotations

from telemetry_privacy.patterns import PrivacyRules, get_default_rules


def redact_emails(text: str, rules: PrivacyRules | None = None) -> str:
    """Replace every email-shaped substring with the email marker.

    Args:
        text: Free text to redact
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Text with emails replaced

    Example:
        >>> redact_emails("Error for user test@example.com")
        'Error for user [email]'
    """
    rules = rules or get_default_rules()
    return rules.email_re.sub(rules.email_marker, text)


def sanitize_string(text: str, rules: PrivacyRules | None = None) -> str:
    """Redact emails and long quoted spans that may hold user content.

    Quoted spans shorter than 10 characters are kept so short technical
    strings (column names, enum values) stay readable.

    Args:
        text: Exception value or similar free text
        rules: Privacy rules (defaults to built-in rules)

    Returns:
        Sanitized text

    Example:
        >>> sanitize_string('Failed to save message: "Help me stay sober"')
        'Failed to save message: "[Filtered]"'
    """
    rules = rules or get_default_rules()
    sanitized = redact_emails(text, rules)
    return rules.quoted_re.sub(rules.quoted_marker, sanitized)


def extract_table_name(url: str, rules: PrivacyRules | None = None) -> str:
    """Extract the table name from a data-store REST URL.

    Example:
        >>> extract_table_name("https://project.supabase.co/rest/v1/messages?select=*")
        'messages'
    """
    rules = rules or get_default_rules()
    match = rules.table_path_re.search(url)
    return match.group(1) if match else rules.unknown_table


def strip_query_params(url_or_route: str | None) -> str | None:
    """Strip everything from the first ``?`` onward.

    Empty or missing values are returned unchanged.
    """
    if not url_or_route:
        return url_or_route
    return url_or_route.split("?", 1)[0]
