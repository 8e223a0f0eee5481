"""Generic utilities"""
