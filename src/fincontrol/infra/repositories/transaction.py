"""SQLModel implementation of the transaction repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from ...domain.entities import TransactionFields
from ...errors import NotFoundError
from ...models.transaction import Transaction
from ..database import SessionFactory

NOT_FOUND_MESSAGE = "Transacción no encontrada o no tienes permiso para modificarla."


def _apply_fields(transaction: Transaction, fields: TransactionFields) -> None:
    transaction.type = fields.type
    transaction.date = fields.date
    transaction.description = fields.description
    transaction.amount = fields.amount
    transaction.category = fields.category
    transaction.account = fields.account


class SQLModelTransactionRepository:
    """Owner-scoped transaction store; every query filters on ``user_id``."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def _get_owned(self, session: Session, owner_id: int, transaction_id: int) -> Optional[Transaction]:
        return session.exec(
            select(Transaction)
            .where(Transaction.id == transaction_id)
            .where(Transaction.user_id == owner_id)
        ).first()

    def create(self, owner_id: int, fields: TransactionFields) -> Transaction:
        with self.session_factory() as session:
            transaction = Transaction(user_id=owner_id)
            _apply_fields(transaction, fields)
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def list_by_owner(self, owner_id: int) -> list[Transaction]:
        with self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.user_id == owner_id)
                .order_by(Transaction.date.desc(), Transaction.id.desc())  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def update(self, owner_id: int, transaction_id: int, fields: TransactionFields) -> Transaction:
        with self.session_factory() as session:
            transaction = self._get_owned(session, owner_id, transaction_id)
            if transaction is None:
                raise NotFoundError(NOT_FOUND_MESSAGE)
            _apply_fields(transaction, fields)
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            session.expunge(transaction)
            return transaction

    def delete(self, owner_id: int, transaction_id: int) -> None:
        with self.session_factory() as session:
            transaction = self._get_owned(session, owner_id, transaction_id)
            if transaction is None:
                raise NotFoundError(NOT_FOUND_MESSAGE)
            session.delete(transaction)
            session.commit()
