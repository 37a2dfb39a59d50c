"""Shared fixtures for the collection test suites."""

from __future__ import annotations

import pytest
from typing import Any, Dict, Iterator, List

from collect.Support.Config import ConfigRepository, config


@pytest.fixture
def zero_index() -> List[str]:
    return ['zero', 'one', 'two', 'three']


@pytest.fixture
def array() -> List[str]:
    return ['first', 'second', 'third']


@pytest.fixture
def assoc() -> Dict[str, str]:
    return {'1st': 'first', '2nd': 'second', '3rd': 'third'}


@pytest.fixture
def dups() -> Dict[str, int]:
    return {
        'zero': 0,
        'one': 1,
        'two': 2,
        'secondzero': 0,
        'three': 3,
        'secondtwo': 2,
        'secondthree': 3,
        'thirdzero': 0,
    }


@pytest.fixture
def numwords() -> Dict[Any, Any]:
    return {
        0: 'zero',
        1: 'one',
        'two': 2,
        3: 'three',
        'four': 4,
        'five': 5,
        4: 'four',
    }


@pytest.fixture
def table() -> List[Dict[str, Any]]:
    return [
        {'id': 10, 'name': 'Foo Barsen', 'active': True, 'age': 49},
        {'id': 11, 'name': 'Fooby McBar', 'active': False, 'age': 19},
        {'id': 12, 'name': 'Bar Fooerson', 'active': True, 'age': 82},
        {'id': 13, 'name': 'Foobar McFoobar', 'active': True, 'age': 32},
        {'id': 14, 'name': 'Foo B. Bar', 'active': False, 'age': 31},
        {'id': 15, 'name': 'Barry Fooerston', 'active': False, 'age': 25},
        {'id': 20, 'name': 'Fooey Barenstein', 'active': True, 'age': 32},
        {'id': 34, 'name': 'Boo Farson', 'active': True, 'age': 21},
        {'id': 41, 'name': 'Foobles McBarlot', 'active': True, 'age': 44},
    ]


@pytest.fixture
def settings() -> Iterator[ConfigRepository]:
    """Give tests the global config and restore it afterwards."""
    original = config.all()
    yield config
    for key, value in original.items():
        config.set(key, value)
