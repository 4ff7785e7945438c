"""Unit tests for engines.script.outcome: classify() and boundary values."""

import json
from datetime import date
from decimal import Decimal
from uuid import UUID

import pytest

from jailbox.engines.script import (
    AccessDenied,
    CompileError,
    EngineFault,
    Err,
    Faulted,
    InvocationFault,
    IOFailure,
    NotFound,
    Ok,
    OutcomeKind,
    Rejected,
    Success,
    classify,
)
from jailbox.engines.script.outcome import (
    INTERNAL_FAULT,
    PlainText,
    StructuredValue,
    Unconvertible,
    to_boundary_value,
)


class _Opaque:
    pass


class TestBoundaryValue:
    def test_structured(self) -> None:
        assert to_boundary_value({"a": [1, 2]}) == StructuredValue('{"a":[1,2]}')
        assert to_boundary_value("ok") == StructuredValue('"ok"')
        assert to_boundary_value(None) == StructuredValue("null")
        assert to_boundary_value((1, "x")) == StructuredValue('[1,"x"]')

    def test_unicode_kept(self) -> None:
        assert to_boundary_value("héllo") == StructuredValue('"héllo"')

    def test_plain_text_from_own_str(self) -> None:
        assert to_boundary_value(Decimal("1.50")) == PlainText("1.50")
        assert to_boundary_value(date(2024, 1, 2)) == PlainText("2024-01-02")
        uid = UUID("12345678-1234-5678-1234-567812345678")
        assert to_boundary_value(uid) == PlainText(str(uid))

    def test_plain_text_from_utf8_bytes(self) -> None:
        assert to_boundary_value(b"abc") == PlainText("abc")

    def test_unconvertible(self) -> None:
        assert to_boundary_value(_Opaque()) == Unconvertible("_Opaque")
        assert to_boundary_value({1, 2}) == Unconvertible("set")
        assert to_boundary_value(lambda: 1) == Unconvertible("function")
        assert to_boundary_value(b"\xff") == Unconvertible("bytes")

    def test_exception_is_never_text(self) -> None:
        assert to_boundary_value(ValueError("x")) == Unconvertible("ValueError")

    def test_circular_structure(self) -> None:
        loop: list = []
        loop.append(loop)
        assert to_boundary_value(loop) == Unconvertible("list")


class TestClassifyBareValues:
    @pytest.mark.parametrize(
        "value,body",
        [
            ("ok", '"ok"'),
            ({"a": 1}, '{"a":1}'),
            ([1, 2, 3], "[1,2,3]"),
            (42, "42"),
            (True, "true"),
            (None, "null"),
            (Decimal("2.5"), '"2.5"'),
        ],
    )
    def test_bare_value_is_success(self, value: object, body: str) -> None:
        out = classify(value)
        assert out == Success(body)
        assert out.kind is OutcomeKind.SUCCESS

    def test_success_body_is_valid_json(self) -> None:
        out = classify({"nested": {"list": [1, "two", None]}})
        assert isinstance(out, Success)
        assert json.loads(out.body) == {"nested": {"list": [1, "two", None]}}

    def test_unconvertible_bare_value_faults(self) -> None:
        out = classify(_Opaque())
        assert isinstance(out, Faulted)
        assert out.fault == "UnclassifiableValue"
        assert "_Opaque" in out.diagnostic


class TestClassifyResultValues:
    def test_ok_unwrapped_one_level(self) -> None:
        assert classify(Ok("ok")) == Success('"ok"')
        assert classify(Ok({"k": "v"})) == Success('{"k":"v"}')

    def test_nested_result_is_not_unwrapped_twice(self) -> None:
        assert isinstance(classify(Ok(Ok(1))), Faulted)
        assert isinstance(classify(Err(Err("x"))), Faulted)

    def test_err_string_rejected_verbatim(self) -> None:
        out = classify(Err("bad input"))
        assert out == Rejected("bad input")
        assert out.kind is OutcomeKind.REJECTED

    def test_err_structured_payload(self) -> None:
        assert classify(Err({"field": "name"})) == Rejected('{"field":"name"}')
        assert classify(Err(3)) == Rejected("3")

    def test_err_plain_text_payload(self) -> None:
        assert classify(Err(Decimal("1.0"))) == Rejected("1.0")

    def test_err_unconvertible_payload_faults(self) -> None:
        out = classify(Err(_Opaque()))
        assert isinstance(out, Faulted)
        assert out.fault == "UnclassifiableValue"

    def test_err_application_file_errors_rejected(self) -> None:
        assert classify(Err(NotFound("File not found: x"))) == Rejected("File not found: x")
        assert classify(Err(AccessDenied("no"))) == Rejected("no")

    @pytest.mark.parametrize(
        "payload",
        [
            IOFailure("disk gone", cause=OSError(5, "EIO")),
            ValueError("internal"),
            InvocationFault("x"),
            ZeroDivisionError("division by zero"),
        ],
    )
    def test_err_with_internal_exception_promoted(self, payload: BaseException) -> None:
        out = classify(Err(payload))
        assert isinstance(out, Faulted)
        assert out.fault == INTERNAL_FAULT
        assert out.kind is OutcomeKind.FAULTED


class TestClassifyEngineFaults:
    @pytest.mark.parametrize(
        "error,fault",
        [
            (CompileError(["Line 1: SyntaxError"]), "CompileError"),
            (InvocationFault("entry point 'check' is not defined"), "InvocationFault"),
            (TypeError("check() takes 0 positional arguments"), "TypeError"),
            (NotFound("File not found: x"), "NotFound"),
        ],
    )
    def test_engine_fault_is_faulted(self, error: Exception, fault: str) -> None:
        out = classify(EngineFault(error))
        assert isinstance(out, Faulted)
        assert out.fault == fault
        assert type(error).__name__ in out.diagnostic

    def test_compile_error_diagnostics_kept(self) -> None:
        out = classify(EngineFault(CompileError(["Line 3: bad", "Line 4: worse"])))
        assert isinstance(out, Faulted)
        assert "Line 3: bad" in out.diagnostic
        assert "Line 4: worse" in out.diagnostic
