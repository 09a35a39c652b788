"""
Structure quality models.

Predicted or experimental structures of a domain and their pLDDT scores.
Only the columns the quality charts read are mapped.
"""

from typing import Optional

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cluster_dashboard.shared.models.base import Base


# pLDDT assumed for a structure that carries no score
DEFAULT_PLDDT = 70


class DomainStructure(Base):
    """
    One structure model of a domain.

    A domain may have several, one per source (e.g. "alphafold", "pdb").
    """

    __tablename__ = "domain_structure"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    domain_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("domain.id"),
        nullable=False,
        index=True,
    )
    source: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    mean_plddt: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<DomainStructure(domain_id={self.domain_id}, source={self.source})>"


class DomainPlddtDetail(Base):
    """Per-domain pLDDT summary."""

    __tablename__ = "domain_plddt_detail"

    domain_id: Mapped[int] = mapped_column(Integer, ForeignKey("domain.id"), primary_key=True)
    average_plddt: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
