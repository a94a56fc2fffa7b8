"""Object graphs: ``GRAPH`` instances are shared within one ``resolve`` call.

``Injected`` members are filled in after the owner is cached, so graph-scoped
services may reference each other cyclically.
"""

from __future__ import annotations

from dicekit import Container, Injected


class UnitOfWork:
    pass


class Orders:
    unit_of_work = Injected(UnitOfWork)


class Invoices:
    unit_of_work = Injected(UnitOfWork)


class Checkout:
    orders = Injected(Orders)
    invoices = Injected(Invoices)


class Page:
    pass


class Layout:
    page = Injected(Page)


Page.layout = Injected(Layout)  # type: ignore[attr-defined]
Page.layout.__set_name__(Page, "layout")  # type: ignore[attr-defined]


def main() -> None:
    container = Container()
    for service in (UnitOfWork, Orders, Invoices, Checkout, Page, Layout):
        container.register(service)

    first = container.resolve(Checkout)
    second = container.resolve(Checkout)

    shared = first.orders.unit_of_work is first.invoices.unit_of_work
    print(f"shared_within_graph={shared}")  # => shared_within_graph=True

    fresh = first.orders.unit_of_work is not second.orders.unit_of_work
    print(f"fresh_across_graphs={fresh}")  # => fresh_across_graphs=True

    page = container.resolve(Page)
    print(f"cycle_closed={page.layout.page is page}")  # => cycle_closed=True


if __name__ == "__main__":
    main()
