"""Daily Report package.

This package is organized by feature modules (employees, reports) with
service/repository layers; the web layer lives outside this package.
"""
