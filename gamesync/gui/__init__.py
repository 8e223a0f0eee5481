"""Graphical bits"""
