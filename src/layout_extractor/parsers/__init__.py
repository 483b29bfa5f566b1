"""Builders turning a C++ CST into layout declarations."""
