"""
Unit tests for time_trace_analyzer.processors.demangler module.
"""
import pytest
from time_trace_analyzer.processors.demangler import SymbolDemangler, decode_itanium


class CountingDecoder:
    """Wraps the real decoder and counts how often it runs."""

    def __init__(self, decoder=decode_itanium):
        self.decoder = decoder
        self.calls = []

    def __call__(self, symbol):
        self.calls.append(symbol)
        return self.decoder(symbol)


class TestUnwrap:
    """Tests for stripping the parenthesis wrapper."""

    def test_wrapped(self):
        assert SymbolDemangler.unwrap("(_Z3fooi)") == "_Z3fooi"

    def test_not_wrapped(self):
        assert SymbolDemangler.unwrap("_Z3fooi") == "_Z3fooi"

    def test_only_outer_parentheses(self):
        assert SymbolDemangler.unwrap("(foo(int))") == "foo(int"


class TestDemangle:
    """Tests for the demangle() method."""

    def test_wrapped_mangled_name(self):
        assert SymbolDemangler().demangle("(_Z3fooi)") == "foo(int)"

    def test_plain_mangled_name(self):
        assert SymbolDemangler().demangle("_Z3fooi") == "foo(int)"

    def test_namespaced_name(self):
        result = SymbolDemangler().demangle("_ZN5boost6chrono24process_system_cpu_clock3nowEv")
        assert result == "boost::chrono::process_system_cpu_clock::now()"

    def test_unmangled_name_is_returned_unchanged(self):
        assert SymbolDemangler().demangle("main") == "main"

    def test_unmangled_name_is_unwrapped(self):
        assert SymbolDemangler().demangle("(main)") == "main"

    def test_decoder_failure_falls_back_to_unwrapped_name(self):
        def failing_decoder(symbol):
            raise ValueError("unsupported")

        assert SymbolDemangler(failing_decoder).demangle("(_Z3fooi)") == "_Z3fooi"


class TestCache:
    """Tests for memoization of decoded names."""

    def test_decodes_each_symbol_once(self):
        decoder = CountingDecoder()
        demangler = SymbolDemangler(decoder)

        first = demangler.demangle("_Z3fooi")
        second = demangler.demangle("_Z3fooi")

        assert first == second == "foo(int)"
        assert decoder.calls == ["_Z3fooi"]

    def test_cache_key_is_unwrapped_name(self):
        decoder = CountingDecoder()
        demangler = SymbolDemangler(decoder)

        demangler.demangle("(_Z3fooi)")
        demangler.demangle("_Z3fooi")

        assert decoder.calls == ["_Z3fooi"]
        assert demangler.cache == {"_Z3fooi": "foo(int)"}

    def test_failed_decodes_are_cached_too(self):
        decoder = CountingDecoder(lambda symbol: None)
        demangler = SymbolDemangler(decoder)

        demangler.demangle("not_mangled")
        demangler.demangle("not_mangled")

        assert len(decoder.calls) == 1

    def test_separate_instances_do_not_share_cache(self):
        decoder = CountingDecoder()

        SymbolDemangler(decoder).demangle("_Z3fooi")
        SymbolDemangler(decoder).demangle("_Z3fooi")

        assert len(decoder.calls) == 2


@pytest.mark.parametrize("symbol", ["", "_Z", "_Z3", "(", "()"])
def test_degenerate_input_never_raises(symbol):
    result = SymbolDemangler().demangle(symbol)
    assert isinstance(result, str)
