from bakery.schemas.cake import CakeCreate, CakeRead, CakeUpdate, CakeWrite

__all__ = [
	"CakeCreate",
	"CakeRead",
	"CakeUpdate",
	"CakeWrite",
]
