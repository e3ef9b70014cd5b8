from flask import request

DEFAULT_RECORDS_PER_PAGE = 10
MAX_RECORDS_PER_PAGE = 100

def get_page_window():
    """Read recordPerPage, page and startIndex from the query string.

    An explicit startIndex wins over the offset derived from page.
    """
    record_per_page = request.args.get('recordPerPage', DEFAULT_RECORDS_PER_PAGE, type=int)
    if record_per_page < 1:
        record_per_page = DEFAULT_RECORDS_PER_PAGE
    record_per_page = min(record_per_page, MAX_RECORDS_PER_PAGE)

    page = request.args.get('page', 1, type=int)
    if page < 1:
        page = 1

    start_index = request.args.get('startIndex', type=int)
    if start_index is None or start_index < 0:
        start_index = (page - 1) * record_per_page

    return start_index, record_per_page

def paginate(query, created_at_column, items_key):
    """Newest first, returned as {'total_count': n, items_key: [...]}"""
    start_index, record_per_page = get_page_window()

    total_count = query.order_by(None).count()
    records = query.order_by(created_at_column.desc()).offset(start_index).limit(record_per_page).all()

    return {
        'total_count': total_count,
        items_key: [record.to_dict() for record in records]
    }
