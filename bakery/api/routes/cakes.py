from fastapi import APIRouter, Depends, HTTPException, Response, status

from bakery.api.deps import get_store
from bakery.models.enums import Occasion
from bakery.schemas.cake import CakeRead, CakeWrite
from bakery.services.catalog_store import CatalogStore
from bakery.services.resources import COLUMN_NAME, COLUMN_OCCASION, COLUMN_PRICE, COLUMN_QUANTITY

router = APIRouter(prefix="/cakes", tags=["cakes"])

SAMPLE_CAKE = {
    COLUMN_NAME: "Racing Car",
    COLUMN_OCCASION: Occasion.BIRTHDAY,
    COLUMN_PRICE: 7.96,
    COLUMN_QUANTITY: 10,
}


def _read_one(store: CatalogStore, item_id: int) -> CakeRead:
    row = store.query(store.collection_uri.with_appended_id(item_id)).first()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cake not found")
    return CakeRead.model_validate(row)


@router.get("/", response_model=list[CakeRead])
def list_cakes(store: CatalogStore = Depends(get_store)) -> list[CakeRead]:
    """Return every cake in the catalog."""

    return [CakeRead.model_validate(row) for row in store.query(store.collection_uri)]


@router.post("/", response_model=CakeRead, status_code=status.HTTP_201_CREATED)
def create_cake(cake_in: CakeWrite, store: CatalogStore = Depends(get_store)) -> CakeRead:
    """Add a cake; name and a valid occasion are required."""

    new_uri = store.insert(store.collection_uri, cake_in.model_dump(exclude_unset=True))
    return _read_one(store, new_uri.parse_id())


@router.post("/sample", response_model=CakeRead, status_code=status.HTTP_201_CREATED)
def create_sample_cake(store: CatalogStore = Depends(get_store)) -> CakeRead:
    """Insert a hardcoded cake, handy for trying out the list screen."""

    new_uri = store.insert(store.collection_uri, SAMPLE_CAKE)
    return _read_one(store, new_uri.parse_id())


@router.delete("/")
def delete_all_cakes(store: CatalogStore = Depends(get_store)) -> dict[str, int]:
    """Remove every cake from the catalog."""

    return {"deleted": store.delete(store.collection_uri)}


@router.get("/{cake_id}", response_model=CakeRead)
def get_cake(cake_id: int, store: CatalogStore = Depends(get_store)) -> CakeRead:
    """Retrieve a single cake by identifier."""

    return _read_one(store, cake_id)


@router.patch("/{cake_id}", response_model=CakeRead)
def update_cake(cake_id: int, cake_in: CakeWrite, store: CatalogStore = Depends(get_store)) -> CakeRead:
    """Apply the supplied fields to an existing cake."""

    updates = cake_in.model_dump(exclude_unset=True)
    rows_updated = store.update(store.collection_uri.with_appended_id(cake_id), updates)
    if updates and rows_updated == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cake not found")
    return _read_one(store, cake_id)


@router.delete("/{cake_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cake(cake_id: int, store: CatalogStore = Depends(get_store)) -> Response:
    """Delete a cake if it exists."""

    if store.delete(store.collection_uri.with_appended_id(cake_id)) == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cake not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
