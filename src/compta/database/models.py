"""SQLAlchemy models for compta database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    number = Column(String, unique=True, nullable=False, index=True)
    label = Column(String, nullable=False)
    account_class = Column(Integer, nullable=False)
    normal_sense = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    is_letterable = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    lines = relationship("EntryLine", back_populates="account")


class Journal(Base):
    """Accounting journal model."""

    __tablename__ = "journals"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    label = Column(String, nullable=False)
    journal_type = Column(String, nullable=False)
    counterpart_account_number = Column(String, ForeignKey("accounts.number"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    entries = relationship("JournalEntry", back_populates="journal")


class FiscalYear(Base):
    """Fiscal year model."""

    __tablename__ = "fiscal_years"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, unique=True, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String, nullable=False)
    closed_at = Column(DateTime, nullable=True)


class JournalEntry(Base):
    """Journal entry header model."""

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    piece_number = Column(String, unique=True, nullable=False)
    journal_code = Column(String, ForeignKey("journals.code"), nullable=False)
    date = Column(Date, nullable=False, index=True)
    label = Column(String, nullable=False)
    status = Column(String, nullable=False, index=True)
    total_debit = Column(Numeric(14, 2), nullable=False)
    total_credit = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    validated_at = Column(DateTime, nullable=True)

    journal = relationship("Journal", back_populates="entries")
    lines = relationship(
        "EntryLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="EntryLine.position",
    )


class EntryLine(Base):
    """Journal entry line model."""

    __tablename__ = "entry_lines"

    id = Column(Integer, primary_key=True)
    entry_id = Column(Integer, ForeignKey("entries.id"), nullable=False)
    position = Column(Integer, nullable=False)
    account_number = Column(String, ForeignKey("accounts.number"), nullable=False, index=True)
    label = Column(String, nullable=False)
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)
    lettering_code = Column(String, nullable=True)

    __table_args__ = (UniqueConstraint("entry_id", "position", name="uq_entry_position"),)

    entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="lines")


class Reconciliation(Base):
    """Bank reconciliation model."""

    __tablename__ = "reconciliations"

    id = Column(Integer, primary_key=True)
    account_number = Column(String, ForeignKey("accounts.number"), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    opening_book_balance = Column(Numeric(14, 2), nullable=False)
    statement_balance = Column(Numeric(14, 2), nullable=False)
    status = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    finalized_at = Column(DateTime, nullable=True)

    lines = relationship(
        "ReconciliationLine",
        back_populates="reconciliation",
        cascade="all, delete-orphan",
        order_by="ReconciliationLine.id",
    )


class ReconciliationLine(Base):
    """Bank reconciliation line model."""

    __tablename__ = "reconciliation_lines"

    id = Column(Integer, primary_key=True)
    reconciliation_id = Column(Integer, ForeignKey("reconciliations.id"), nullable=False)
    entry_id = Column(Integer, ForeignKey("entries.id"), nullable=False)
    line_id = Column(Integer, ForeignKey("entry_lines.id"), nullable=False)
    label = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)
    is_reconciled = Column(Boolean, default=False, nullable=False)
    reconciled_date = Column(Date, nullable=True)

    reconciliation = relationship("Reconciliation", back_populates="lines")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
