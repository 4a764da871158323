from typing import List, Optional

from sqlalchemy.orm import Session

from vibeshop.models.order import Order, OrderLine


class OrderRepository:
    def __init__(self, db: Session):
        self.db = db

    def add(self, order: Order, lines: List[OrderLine]) -> Order:
        order.lines = lines
        self.db.add(order)
        self.db.flush()
        return order

    def get_by_order_id(self, order_id: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.order_id == order_id).first()

    def list_newest_first(self) -> List[Order]:
        return self.db.query(Order).order_by(Order.created_at.desc(), Order.id.desc()).all()
