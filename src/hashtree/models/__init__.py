"""
Proof Models Package

This package contains the Pydantic models used for the JSON output and input
of the hashtree command-line tool:

- Inclusion proofs and their steps
- Tree summaries
- Diff reports

Usage:
    from hashtree.models import ProofModel

    model = ProofModel.from_proof(tree.proof_for_data("alice"))
    proof = ProofModel.model_validate_json(model.model_dump_json()).to_proof()
"""

from .proof_models import (
    ProofStepModel,
    ProofModel,
    TreeSummaryModel,
    DiffReportModel
)

__all__ = [
    'ProofStepModel',
    'ProofModel',
    'TreeSummaryModel',
    'DiffReportModel'
]
