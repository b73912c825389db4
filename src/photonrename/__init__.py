# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""PhotonRename - Batch Image Renamer and Resizer."""

from photonrename.__about__ import __version__

__all__ = ["__version__"]
