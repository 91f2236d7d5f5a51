"""
Test cases for severity and direction enums.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.enums import Direction, Severity, TrendType


def test_severity_weights_order():
    assert Severity.critical.weight() > Severity.warning.weight()


def test_highest_picks_critical():
    assert Severity.highest([Severity.warning, Severity.critical, Severity.warning]) == Severity.critical
    assert Severity.highest([Severity.warning]) == Severity.warning


def test_highest_of_nothing_is_warning():
    assert Severity.highest([]) == Severity.warning


def test_from_ratio_is_strict():
    assert Severity.from_ratio(2.25, 2.25) == Severity.warning
    assert Severity.from_ratio(2.26, 2.25) == Severity.critical


def test_enum_values_are_wire_strings():
    assert Severity("critical") is Severity.critical
    assert Direction.spike.value == "spike"
    assert TrendType.deceleration.value == "deceleration"
