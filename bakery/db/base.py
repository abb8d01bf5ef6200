# Import all models here so that Base.metadata sees every table.
from bakery.db.base_class import Base  # noqa: F401
from bakery.models.cake import Cake  # noqa: F401
