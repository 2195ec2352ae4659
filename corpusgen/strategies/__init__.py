"""
Value generation strategies for corpusgen.

This module re-exports the abstract interfaces, the concrete generators and
the factory so downstream code can import from `corpusgen.strategies` directly.
"""

from corpusgen.strategies.abstract import AbstractValueGenerator, ValueGenerator
from corpusgen.strategies.counter import CounterGenerator
from corpusgen.strategies.factory import build_value_generator
from corpusgen.strategies.fuzzy import FuzzyGenerator
from corpusgen.strategies.uniform import (
    BooleanGenerator,
    ConstantGenerator,
    DateGenerator,
    IpGenerator,
    KeywordGenerator,
    UniformGenerator,
)

__all__ = [
    # Abstracts
    "AbstractValueGenerator",
    "ValueGenerator",
    # Concrete generators
    "BooleanGenerator",
    "ConstantGenerator",
    "CounterGenerator",
    "DateGenerator",
    "FuzzyGenerator",
    "IpGenerator",
    "KeywordGenerator",
    "UniformGenerator",
    # Factory
    "build_value_generator",
]
