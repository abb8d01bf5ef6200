from bakery.services.notifications import ChangeNotifier, LiveQuery
from bakery.services.resources import ResourceURI, content_uri

AUTHORITY = "com.example.richard.inventoryapp"


def test_exact_observer_sees_only_its_resource_and_ancestors() -> None:
    notifier = ChangeNotifier()
    collection = content_uri(AUTHORITY)
    seen: list[ResourceURI] = []
    notifier.register(collection.with_appended_id(1), seen.append)

    notifier.notify(collection.with_appended_id(2))
    notifier.notify(collection.with_appended_id(1))
    notifier.notify(collection)

    assert seen == [collection.with_appended_id(1), collection]


def test_descendant_observer_sees_item_changes() -> None:
    notifier = ChangeNotifier()
    collection = content_uri(AUTHORITY)
    plain: list[ResourceURI] = []
    descendants: list[ResourceURI] = []
    notifier.register(collection, plain.append)
    notifier.register(collection, descendants.append, notify_for_descendants=True)

    notifier.notify(collection.with_appended_id(9))

    assert plain == []
    assert descendants == [collection.with_appended_id(9)]


def test_unregister_stops_delivery() -> None:
    notifier = ChangeNotifier()
    seen: list[ResourceURI] = []
    unregister = notifier.register(str(content_uri(AUTHORITY)), seen.append)

    unregister()
    unregister()
    notifier.notify(content_uri(AUTHORITY))

    assert seen == []


def test_live_query_refreshes_after_mutations(store, cakes_uri) -> None:
    with LiveQuery(store, cakes_uri, columns=["id", "name"], order="id") as live:
        assert len(live.rows) == 0

        new_uri = store.insert(cakes_uri, {"name": "Sponge", "occasion": 0})
        assert [row["name"] for row in live.rows] == ["Sponge"]

        store.update(new_uri, {"name": "Lemon Sponge"})
        assert [row["name"] for row in live.rows] == ["Lemon Sponge"]

        store.delete(new_uri)
        assert len(live.rows) == 0
        assert live.reload_count == 3

    store.insert(cakes_uri, {"name": "After close", "occasion": 0})
    assert live.reload_count == 3


def test_live_query_ignores_no_op_writes(store, cakes_uri) -> None:
    live = LiveQuery(store, cakes_uri)

    store.update(cakes_uri.with_appended_id(99), {"quantity": 1})
    store.delete(cakes_uri, "name = ?", ["missing"])

    assert live.reload_count == 0
    live.close()


def test_failing_observer_does_not_stop_delivery() -> None:
    notifier = ChangeNotifier()
    collection = content_uri(AUTHORITY)
    seen: list[ResourceURI] = []

    def broken(_: ResourceURI) -> None:
        raise RuntimeError("view went away")

    notifier.register(collection, broken)
    notifier.register(collection, seen.append)

    notifier.notify(collection)

    assert seen == [collection]


def test_write_succeeds_when_an_observer_fails(store, cakes_uri) -> None:
    def broken(_: ResourceURI) -> None:
        raise RuntimeError("view went away")

    store.notifier.register(cakes_uri, broken)

    new_uri = store.insert(cakes_uri, {"name": "Survivor", "occasion": 0})

    assert store.query(new_uri).first()["name"] == "Survivor"
