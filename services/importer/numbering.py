"""Invoice numbering of the legacy system.

Numbers are ``<years since 1980><"01"><5-digit sequence>``, e.g. the 7th
invoice taxed in 2021 is ``410100007``. Imported invoices keep these numbers.
"""

NUMBERING_EPOCH_YEAR = 1980
NUMBER_SERIES = "01"
SEQUENCE_WIDTH = 5


def format_invoice_number(taxed_year: int, seq_id: int) -> str:
    """Format a legacy invoice number.

    Args:
        taxed_year: Year of the taxable fulfillment date
        seq_id: Sequence number of the invoice

    Returns:
        Invoice number string

    Example:
        >>> format_invoice_number(2021, 7)
        '410100007'
    """
    return f"{taxed_year - NUMBERING_EPOCH_YEAR}{NUMBER_SERIES}{seq_id:0{SEQUENCE_WIDTH}d}"
