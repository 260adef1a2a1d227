"""SQLAlchemy models for realm (tenant) configuration."""

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# --- Tenancy ---
class Tenant(Base):
    __tablename__ = "tenants"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True)
    display_name: Mapped[str] = mapped_column(String(200), nullable=True)
    login_theme: Mapped[str] = mapped_column(String(60), nullable=True)  # NULL -> provider default
    internationalization_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    supported_locales: Mapped[list] = mapped_column(JSON, default=list)
    default_locale: Mapped[str] = mapped_column(String(20), nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
