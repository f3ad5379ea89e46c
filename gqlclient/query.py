def pack_query(query):
    """
    Reduce a formatted GraphQL query document to a single line.

    Every run of whitespace (spaces, tabs, newlines) collapses to a single
    space and leading/trailing whitespace is dropped, so a query written
    across many indented lines for readability is sent as compact JSON.

    Args:
        query (str): The query text, formatted however the caller likes.

    Returns:
        str: The packed query. Whitespace-only input gives an empty string.
    """
    return " ".join(query.split())
