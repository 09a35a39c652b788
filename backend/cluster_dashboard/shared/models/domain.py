"""
Domain Entity Model

A protein domain with its ECOD T-group assignment.
"""

from typing import Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cluster_dashboard.shared.models.base import Base


class Domain(Base):
    """
    Domain model.

    Attributes:
        id: Internal identifier (what cluster members point at)
        unp_acc: UniProt accession of the parent protein
        domain_id: Public domain identifier, e.g. "e1abcA1"
        range: Residue range within the protein, e.g. "12-130"
        t_group: Fold/topology classification code, e.g. "2003.1.1"
    """

    __tablename__ = "domain"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    unp_acc: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    domain_id: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    range: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    t_group: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Domain(id={self.id}, domain_id={self.domain_id}, t_group={self.t_group})>"
