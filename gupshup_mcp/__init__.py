# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Gupshup MCP - SMS and WhatsApp gateway tools for LLM agents."""

__version__ = "0.2.0"
