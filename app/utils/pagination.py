# app/utils/pagination.py
import math
from typing import Any, List


def total_pages(total_count: int, page_size: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def page_util(total_count: int, page_no: int, page_size: int, items: List[Any]) -> dict:
    """
    Wrap one page of results with the numbers a pager needs.
    """
    total_page = total_pages(total_count, page_size)
    return {
        "page_no": page_no,
        "page_size": page_size,
        "total_page": total_page,
        "total_count": total_count,
        "first_page": page_no <= 1,
        "last_page": page_no >= total_page,
        "list": items,
    }
