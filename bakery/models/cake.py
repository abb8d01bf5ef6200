from sqlalchemy import Float, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from bakery.db.base_class import Base
from bakery.services.resources import (
    COLUMN_ID,
    COLUMN_NAME,
    COLUMN_OCCASION,
    COLUMN_PRICE,
    COLUMN_QUANTITY,
    TABLE_NAME,
)


class Cake(Base):
    """One cake in the bakery catalog."""

    __tablename__ = TABLE_NAME
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(COLUMN_ID, Integer, primary_key=True)
    name: Mapped[str] = mapped_column(COLUMN_NAME, String, nullable=False)
    occasion: Mapped[int] = mapped_column(COLUMN_OCCASION, Integer, nullable=False)
    price: Mapped[float] = mapped_column(COLUMN_PRICE, Float, nullable=False, server_default=text("0"))
    quantity: Mapped[int] = mapped_column(COLUMN_QUANTITY, Integer, nullable=False, server_default=text("0"))
