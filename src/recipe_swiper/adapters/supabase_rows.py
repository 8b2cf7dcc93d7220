"""Helpers for parsing Supabase rows."""


def parse_text_array(value: object) -> list[str]:
    """Parse a Postgres text[] column that may arrive as a list or a literal."""
    if isinstance(value, list):
        items = [str(item) for item in value]
    elif isinstance(value, str):
        items = value.strip().strip("{}").split(",")
    else:
        return []
    cleaned = (item.strip().strip('"').strip() for item in items)
    return [item for item in cleaned if item]
