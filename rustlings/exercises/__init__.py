"""Worked solutions to several exercise topics, as plain functions and classes."""