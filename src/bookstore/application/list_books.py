"""Application services: catalog queries."""

from __future__ import annotations

from bookstore.application.config import OrderingConfig
from bookstore.application.dto import BookDTO, PageDTO
from bookstore.application.queries import (
    BOOK_SORT_KEYS,
    BookQuery,
    paginate,
    resolve_limit,
    sort_items,
)
from bookstore.domain.exceptions import EntityNotFoundError
from bookstore.domain.repository.book_repository import BookRepository


class ListBooksHandler:

    def __init__(self, book_repo: BookRepository, config: OrderingConfig) -> None:
        self._book_repo = book_repo
        self._config = config

    def handle(self, query: BookQuery) -> PageDTO[BookDTO]:
        limit = resolve_limit(query.limit, query.page, self._config)
        matching = [b for b in self._book_repo.list_all() if query.matches(b)]
        ordered = sort_items(matching, query.sort, BOOK_SORT_KEYS)

        return PageDTO(
            items=[BookDTO.from_book(b) for b in paginate(ordered, query.page, limit)],
            page=query.page,
            limit=limit,
            total=len(matching),
        )


class ShowBookHandler:

    def __init__(self, book_repo: BookRepository) -> None:
        self._book_repo = book_repo

    def handle(self, book_id: str) -> BookDTO:
        book = self._book_repo.get_by_id(book_id)
        if book is None:
            raise EntityNotFoundError(f"Book with ID '{book_id}' not found")
        return BookDTO.from_book(book)
