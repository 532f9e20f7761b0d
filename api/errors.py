"""
Exceptions raised by the API layer.
"""


class BookNotFoundError(Exception):
    """Requested book id is not in the store."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book with ID {book_id} not found")
