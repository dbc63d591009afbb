# Copyright 2026 mofxmi Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface."""
