"""Customs declaration currency conversion service."""
