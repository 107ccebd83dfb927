"""Book aggregate: the catalog document shared by every other aggregate.

Books live independently of carts and orders. Two writers touch a book
after it is created: order placement (stock) and review aggregation
(rating). Neither is exposed as a plain attribute assignment to clients.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bookstore.domain.exceptions import ValidationError
from bookstore.domain.model.value_objects import Money, RatingSummary

MAX_TITLE_LENGTH = 200


@dataclass
class Book:
    """A book in the catalog.

    Invariants:
    - ``stock`` is an integer and never negative
    - ``rating`` is derived from reviews and only changes via ``apply_rating``
    """

    id: str
    title: str
    authors: list[str]
    price: Money
    stock: int = 0
    rating: RatingSummary = field(default_factory=RatingSummary.empty)
    categories: list[str] = field(default_factory=lambda: ["Uncategorized"])
    isbn: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.stock, bool) or not isinstance(self.stock, int):
            raise ValidationError("Stock must be an integer")
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")

    # --- Factory (used for NEW books only) ------------------------------------

    @staticmethod
    def create(
        book_id: str,
        title: str,
        authors: list[str],
        price: Money,
        stock: int,
        categories: list[str] | None = None,
        isbn: str | None = None,
    ) -> Book:
        if not title or not title.strip():
            raise ValidationError("Book title is required")
        if len(title.strip()) > MAX_TITLE_LENGTH:
            raise ValidationError(
                f"Book title cannot be more than {MAX_TITLE_LENGTH} characters"
            )
        cleaned_authors = [a.strip() for a in authors if a and a.strip()]
        if not cleaned_authors:
            raise ValidationError("Please provide at least one author")

        return Book(
            id=book_id,
            title=title.strip(),
            authors=cleaned_authors,
            price=price,
            stock=stock,
            categories=[c.strip() for c in categories or [] if c.strip()] or ["Uncategorized"],
            isbn=isbn.strip() if isbn else None,
        )

    # --- Mutations ------------------------------------------------------------

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        Carts keep the price they snapshotted when the book was added and
        orders keep the price frozen at purchase time, so neither changes.
        """
        if new_price.currency != self.price.currency:
            raise ValidationError(
                f"Cannot change currency of '{self.title}' from "
                f"{self.price.currency} to {new_price.currency}"
            )
        self.price = new_price

    def apply_rating(self, summary: RatingSummary) -> None:
        self.rating = summary

    # --- Computed properties --------------------------------------------------

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
