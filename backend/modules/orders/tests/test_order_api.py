from decimal import Decimal
from fastapi import status

from modules.orders.enums.order_enums import OrderStatus
from modules.orders.tests.factories import OrderFactory, OrderLineFactory


class TestOrderAPI:

    def test_empty_table_has_null_order(self, client, table):
        response = client.get(f"/tables/{table.id}/order")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["table"]["status"] == "empty"
        assert data["order"] is None

    def test_open_order_endpoint(self, client, table):
        response = client.post(f"/tables/{table.id}/order")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "open"
        assert data["table_name"] == "B01"
        assert data["lines"] == []
        assert data["total"] == "0.00"

        again = client.post(f"/tables/{table.id}/order")
        assert again.json()["id"] == data["id"]

    def test_add_items_and_read_back(self, client, table, coffee, tea):
        for item in (coffee, coffee, tea):
            response = client.post(
                f"/tables/{table.id}/order/items",
                json={"menu_item_id": item.id}
            )
            assert response.status_code == status.HTTP_201_CREATED

        data = client.get(f"/tables/{table.id}/order").json()
        assert data["table"]["status"] == "in_use"

        order = data["order"]
        assert order["total"] == "55000.00"
        assert [(line["item_name"], line["qty"], line["amount"])
                for line in order["lines"]] == [
            ("Coffee", 2, "40000.00"), ("Tea", 1, "15000.00")
        ]
        assert order["grouped_lines"][0] == {
            "name": "Coffee", "price": "20000.00", "qty": 2, "total": "40000.00"
        }

    def test_add_inactive_item_is_rejected(self, client, table, inactive_item):
        response = client.post(
            f"/tables/{table.id}/order/items",
            json={"menu_item_id": inactive_item.id}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error_code"] == "ITEM_INACTIVE"
        assert body["path"] == f"/tables/{table.id}/order/items"

    def test_add_unknown_item(self, client, table):
        response = client.post(
            f"/tables/{table.id}/order/items", json={"menu_item_id": 404}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_add_item_requires_menu_item_id(self, client, table):
        response = client.post(f"/tables/{table.id}/order/items", json={})
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_increase_and_decrease_line(self, client, db_session):
        line = OrderLineFactory(item_name="Coffee", qty=1)

        up = client.post(f"/orders/lines/{line.id}/increase")
        assert up.status_code == status.HTTP_200_OK
        assert up.json()["line"]["qty"] == 2
        assert up.json()["order"]["total"] == "40000.00"

        down = client.post(f"/orders/lines/{line.id}/decrease")
        assert down.json()["line"]["qty"] == 1
        assert down.json()["removed"] is False

        gone = client.post(f"/orders/lines/{line.id}/decrease")
        body = gone.json()
        assert body["removed"] is True
        assert body["line"] is None
        assert body["order"]["status"] == "open"
        assert body["order"]["lines"] == []

    def test_decrease_line_of_paid_order(self, client, db_session):
        order = OrderFactory(status=OrderStatus.PAID.value)
        line = OrderLineFactory(order=order)

        response = client.post(f"/orders/lines/{line.id}/decrease")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["error_code"] == "ORDER_CLOSED"

    def test_get_order(self, client, db_session):
        line = OrderLineFactory(item_name="Tea", qty=3)

        response = client.get(f"/orders/{line.order_id}")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["id"] == line.order_id
        assert data["total"] == "60000.00"

    def test_get_missing_order(self, client):
        response = client.get("/orders/999")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_large_amounts_keep_every_digit(self, client, db_session):
        line = OrderLineFactory(item_name="Banquet",
                                price=Decimal("4999999999.99"), qty=2)

        data = client.get(f"/orders/{line.order_id}").json()

        assert data["lines"][0]["price"] == "4999999999.99"
        assert data["lines"][0]["amount"] == "9999999999.98"
        assert data["total"] == "9999999999.98"
