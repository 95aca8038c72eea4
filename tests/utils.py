from sqlmodel import Session, SQLModel, select


def count_rows(session: Session, table: type[SQLModel]) -> int:
    """Return the number of rows currently stored in ``table``."""
    return len(session.exec(select(table)).all())
