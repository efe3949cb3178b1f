#!/usr/bin/python3

__all__ = ['linear_models', 'nonlinear_models', 'window_functions']
