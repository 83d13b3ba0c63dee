"""Domain services for the document store.

Services hold the engine's logic: compiling filters, shaping results and
serializing mutations.
"""

from doclog.domain.services.mutation_gate import MutationGate
from doclog.domain.services.query_compiler import (
    PredicateCompiler,
    compile_operator,
    compile_query,
    is_number,
    strict_equals,
)
from doclog.domain.services.result_shaper import (
    project_records,
    shape_results,
    sort_records,
)

__all__ = [
    "MutationGate",
    "PredicateCompiler",
    "compile_operator",
    "compile_query",
    "is_number",
    "strict_equals",
    "project_records",
    "shape_results",
    "sort_records",
]
