"""Internal issue taxonomy and the cppcheck diagnostic mapping table.

Every cppcheck diagnostic identifier that cppaudit reports maps to exactly one
:class:`IssueCode`. Identifiers absent from :data:`CPPCHECK_ISSUE_CODES` are
not reported at all.

Examples
--------
>>> map_diagnostic("nullPointer")
<IssueCode.NULL_POINTER_DEREFERENCE: 'CXX-E1000'>
>>> map_diagnostic("misra-c2012-8.1")
<IssueCode.MISRA_C2012: 'CXX-M4000'>
>>> map_diagnostic("missingIncludeSystem") is None
True
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Mapping, Optional


class IssueCode(str, Enum):
    NULL_POINTER_DEREFERENCE = "CXX-E1000"
    OUT_OF_BOUNDS_ACCESS = "CXX-E1001"
    MEMORY_LEAK = "CXX-E1002"
    USE_AFTER_FREE = "CXX-E1003"
    UNINITIALIZED_VALUE = "CXX-E1004"
    DIVISION_BY_ZERO = "CXX-E1005"
    UNDEFINED_BEHAVIOR = "CXX-E1006"
    MISMATCHED_DEALLOCATION = "CXX-E1007"
    INVALID_ITERATOR = "CXX-E1008"
    UNUSED_CODE = "CXX-W2000"
    REDUNDANT_CODE = "CXX-W2001"
    CONSTANT_CONDITION = "CXX-W2002"
    MISSING_CONST = "CXX-W2003"
    INEFFICIENT_COPY = "CXX-P3000"
    MISRA_C2012 = "CXX-M4000"

    def __str__(self) -> str:
        return self.value


def _group(code: IssueCode, ids: Iterable[str]) -> Dict[str, IssueCode]:
    return {diag_id: code for diag_id in ids}


# Number of rules per MISRA C:2012 section checked by the cppcheck misra addon.
_MISRA_C2012_RULES: Mapping[int, int] = {
    1: 4, 2: 7, 3: 2, 4: 2, 5: 9, 6: 2, 7: 4, 8: 14, 9: 5, 10: 8, 11: 9,
    12: 4, 13: 6, 14: 4, 15: 7, 16: 7, 17: 8, 18: 8, 19: 2, 20: 14,
    21: 21, 22: 10,
}

MISRA_C2012_IDS = tuple(
    f"misra-c2012-{section}.{rule}"
    for section, count in _MISRA_C2012_RULES.items()
    for rule in range(1, count + 1)
)

CPPCHECK_ISSUE_CODES: Mapping[str, IssueCode] = {
    **_group(IssueCode.NULL_POINTER_DEREFERENCE, (
        "nullPointer",
        "nullPointerDefaultArg",
        "nullPointerRedundantCheck",
        "nullPointerArithmetic",
        "nullPointerArithmeticRedundantCheck",
        "ctunullpointer",
    )),
    **_group(IssueCode.OUT_OF_BOUNDS_ACCESS, (
        "arrayIndexOutOfBounds",
        "arrayIndexOutOfBoundsCond",
        "bufferAccessOutOfBounds",
        "negativeIndex",
        "outOfBounds",
        "containerOutOfBounds",
        "ctuArrayIndex",
        "pointerOutOfBounds",
    )),
    **_group(IssueCode.MEMORY_LEAK, (
        "memleak",
        "memleakOnRealloc",
        "resourceLeak",
        "leakReturnValNotUsed",
        "leakNoVarFunctionCall",
        "publicAllocationError",
    )),
    **_group(IssueCode.USE_AFTER_FREE, (
        "deallocuse",
        "deallocret",
        "doubleFree",
        "danglingLifetime",
        "danglingReference",
        "returnDanglingLifetime",
        "invalidLifetime",
    )),
    **_group(IssueCode.UNINITIALIZED_VALUE, (
        "uninitvar",
        "uninitdata",
        "uninitMemberVar",
        "uninitStructMember",
        "ctuuninitvar",
        "legacyUninitvar",
    )),
    **_group(IssueCode.DIVISION_BY_ZERO, (
        "zerodiv",
        "zerodivcond",
    )),
    **_group(IssueCode.UNDEFINED_BEHAVIOR, (
        "shiftTooManyBits",
        "shiftNegative",
        "integerOverflow",
        "sizeofwithsilentarraypointer",
        "wrongPrintfScanfArgNum",
        "invalidFunctionArg",
        "returnAddressOfAutoVariable",
    )),
    **_group(IssueCode.MISMATCHED_DEALLOCATION, (
        "mismatchAllocDealloc",
        "mismatchSize",
    )),
    **_group(IssueCode.INVALID_ITERATOR, (
        "invalidIterator1",
        "invalidContainer",
        "eraseDereference",
        "mismatchingContainers",
        "derefInvalidIterator",
    )),
    **_group(IssueCode.UNUSED_CODE, (
        "unusedVariable",
        "unreadVariable",
        "unusedStructMember",
        "unusedAllocatedMemory",
        "unusedFunction",
        "unusedPrivateFunction",
        "unusedLabel",
    )),
    **_group(IssueCode.REDUNDANT_CODE, (
        "redundantAssignment",
        "redundantCondition",
        "redundantCopy",
        "redundantInitialization",
        "duplicateExpression",
        "duplicateBranch",
        "duplicateCondition",
        "identicalInnerCondition",
    )),
    **_group(IssueCode.CONSTANT_CONDITION, (
        "knownConditionTrueFalse",
        "oppositeInnerCondition",
        "identicalConditionAfterEarlyExit",
        "compareBoolExpressionWithInt",
    )),
    **_group(IssueCode.MISSING_CONST, (
        "constParameter",
        "constParameterReference",
        "constParameterPointer",
        "constVariable",
        "constVariableReference",
        "constVariablePointer",
        "functionConst",
    )),
    **_group(IssueCode.INEFFICIENT_COPY, (
        "passedByValue",
        "postfixOperator",
        "stlcstr",
        "stlcstrParam",
        "useStlAlgorithm",
        "returnByReference",
    )),
    **_group(IssueCode.MISRA_C2012, MISRA_C2012_IDS),
}


def map_diagnostic(diagnostic_id: str) -> Optional[IssueCode]:
    """Return the issue code for a cppcheck identifier, or None if unmapped."""
    return CPPCHECK_ISSUE_CODES.get(diagnostic_id)


__all__ = ["IssueCode", "CPPCHECK_ISSUE_CODES", "MISRA_C2012_IDS", "map_diagnostic"]
