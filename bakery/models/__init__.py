from bakery.models.cake import Cake
from bakery.models.enums import Occasion

__all__ = ["Cake", "Occasion"]
