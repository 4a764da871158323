from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

_DEPTH_KEY = "smart_transaction_depth"


@contextmanager
def smart_transaction(session: Session) -> Iterator[Session]:
    """
    Run the block as one unit of work on the given Session.

    The outermost block owns the transaction: it commits on success and rolls
    back on any exception. If the session already autobegan a transaction
    (a read before the block) that transaction is adopted rather than left
    dangling. Blocks nested inside another smart_transaction use a SAVEPOINT.
    Usage:
        with smart_transaction(db):
            ... DB work ...
    """
    depth = session.info.get(_DEPTH_KEY, 0)
    session.info[_DEPTH_KEY] = depth + 1
    try:
        if depth:
            with session.begin_nested():
                yield session
        elif session.in_transaction():
            try:
                yield session
            except BaseException:
                session.rollback()
                raise
            session.commit()
        else:
            with session.begin():
                yield session
    finally:
        session.info[_DEPTH_KEY] = depth
