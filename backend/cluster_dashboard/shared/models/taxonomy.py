"""
Taxonomy and T-group lookup models.

Also exposes ``ancestor_name()``, a wrapper for the schema's
``get_ancestor_name(tax_id, rank)`` SQL function used for superkingdom and
phylum rollups.
"""

from typing import Optional

from sqlalchemy import Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql.elements import ColumnElement

from cluster_dashboard.config.settings import settings
from cluster_dashboard.shared.models.base import Base


class TGroupName(Base):
    """Human-readable name for a T-group code."""

    __tablename__ = "tgroup_names"

    tgroup_id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<TGroupName(tgroup_id={self.tgroup_id}, name={self.name})>"


class ProteinTaxonomy(Base):
    """Maps a UniProt accession to its NCBI taxon."""

    __tablename__ = "protein_taxonomy"

    unp_acc: Mapped[str] = mapped_column(String(20), primary_key=True)
    tax_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)


class Taxonomy(Base):
    """NCBI taxon."""

    __tablename__ = "taxonomy"

    tax_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    scientific_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


def ancestor_name(tax_id: ColumnElement, rank: str) -> ColumnElement:
    """
    Build ``<schema>.get_ancestor_name(tax_id, rank)``.

    Args:
        tax_id: Column or expression holding the taxon id
        rank: Taxonomic rank, e.g. "superkingdom", "phylum", "family"
    """
    return getattr(func, settings.DATABASE_SCHEMA).get_ancestor_name(tax_id, rank)
