# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""Tests for the generation-guarded analysis session."""

import threading

import numpy as np
import pytest

from colorcall import AnalysisSession, ImageDecodeError


class _ControlledAnalyzer:
    """Analyzer stand-in whose runs block until released per image."""

    def __init__(self):
        self.gates = {}
        self.started = {}

    def gate(self, name):
        self.gates[name] = threading.Event()
        self.started[name] = threading.Event()

    def __call__(self, image, **options):
        self.started[image].set()
        self.gates[image].wait(timeout=5)
        return f"analysis of {image}"


class TestSession:

    def test_latest_result_published(self):
        analyzer = _ControlledAnalyzer()
        analyzer.gate("first")
        analyzer.gate("second")
        with AnalysisSession(analyzer) as session:
            first = session.submit("first")
            analyzer.started["first"].wait(timeout=5)
            second = session.submit("second")

            analyzer.gates["second"].set()
            assert second.result(timeout=5) == "analysis of second"
            assert session.result == "analysis of second"

            # The older run finishes last but must not overwrite
            analyzer.gates["first"].set()
            assert first.result(timeout=5) == "analysis of first"
            assert session.result == "analysis of second"
            assert session.generation == 2

    def test_submit_clears_previous_result(self):
        analyzer = _ControlledAnalyzer()
        analyzer.gate("a")
        analyzer.gate("b")
        with AnalysisSession(analyzer) as session:
            analyzer.gates["a"].set()
            session.submit("a").result(timeout=5)
            assert session.result == "analysis of a"

            session.submit("b")
            assert session.result is None
            analyzer.gates["b"].set()

    def test_reset_drops_in_flight_run(self):
        analyzer = _ControlledAnalyzer()
        analyzer.gate("slow")
        with AnalysisSession(analyzer) as session:
            future = session.submit("slow")
            analyzer.started["slow"].wait(timeout=5)
            session.reset()
            analyzer.gates["slow"].set()
            future.result(timeout=5)
            assert session.result is None
            assert not session.is_current(1)
            assert session.is_current(2)

    def test_options_forwarded(self):
        seen = {}

        def analyzer(image, **options):
            seen.update(options)
            return "done"

        with AnalysisSession(analyzer, seed=3, stride=1) as session:
            session.submit("img").result(timeout=5)
        assert seen == {"seed": 3, "stride": 1}

    def test_error_published(self):
        with AnalysisSession(seed=0) as session:
            future = session.submit(b"broken bytes")
            with pytest.raises(ImageDecodeError):
                future.result(timeout=5)
            assert isinstance(session.error, ImageDecodeError)
            assert session.result is None

    def test_real_analysis(self):
        img = np.full((20, 20, 3), [30, 60, 200], dtype=np.uint8)
        with AnalysisSession(seed=0) as session:
            analysis = session.submit(img).result(timeout=30)
            assert session.result is analysis
            assert analysis.swatches[0].hex == "#1E3CC8"
            assert session.error is None
