"""Tests for the primary/secondary code buffers."""

import pytest
from metaph.core.emit import CodeBuffers, EmissionArityError, PhoneticCodes


class TestAdd:
    def test_single_token_goes_to_both(self):
        out = CodeBuffers()
        out.add("K")
        assert out.primary == "K"
        assert out.secondary == "K"
        assert not out.alternate

    def test_pair_diverges(self):
        out = CodeBuffers()
        out.add("X", "K")
        assert out.primary == "X"
        assert out.secondary == "K"
        assert out.alternate

    def test_empty_primary_token(self):
        out = CodeBuffers()
        out.add("", "R")
        assert out.primary == ""
        assert out.secondary == "R"
        assert out.alternate

    def test_blank_secondary_suppresses(self):
        out = CodeBuffers()
        out.add("L", " ")
        assert out.primary == "L"
        assert out.secondary == ""
        assert out.alternate

    def test_empty_secondary_copies_primary(self):
        out = CodeBuffers()
        out.add("S", "")
        assert out.secondary == "S"
        assert not out.alternate

    def test_no_tokens_is_contract_violation(self):
        with pytest.raises(EmissionArityError):
            CodeBuffers().add()

    def test_three_tokens_is_contract_violation(self):
        with pytest.raises(EmissionArityError):
            CodeBuffers().add("A", "B", "C")

    def test_violation_is_an_assertion(self):
        assert issubclass(EmissionArityError, AssertionError)


class TestFinish:
    def test_truncates(self):
        out = CodeBuffers()
        out.add("ABCDEF")
        assert out.finish(4) == PhoneticCodes("ABCD", "")

    def test_secondary_only_after_divergence(self):
        out = CodeBuffers()
        out.add("A")
        out.add("F", "V")
        assert out.finish(4) == ("AF", "AV")

    def test_is_full_needs_both(self):
        out = CodeBuffers()
        out.add("AB", "")
        out.add("", "X")
        assert len(out.primary) == 2
        assert len(out.secondary) == 3
        assert not out.is_full(3)
        out.add("C")
        assert out.is_full(3)
