# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2022 Paolo Bonzini
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

from contextlib import contextmanager
import os
import typing


@contextmanager
def open_unlink_on_error(filename: str) -> typing.Iterator[typing.TextIO]:
    # do not unlink an existing file until it has been opened
    do_unlink = not os.path.exists(filename)
    try:
        with open(filename, "w") as f:
            # and never unlink a non-regular file anyway
            do_unlink = do_unlink or os.path.isfile(filename)
            yield f
    except Exception as e:
        if do_unlink:
            os.unlink(filename)
        raise e


def output_filename(fn: str, suffix: str, output_dir: typing.Optional[str] = None,
                    ext: typing.Optional[str] = None) -> str:
    """Insert ``suffix`` before the extension of ``fn``, optionally
       replacing the extension with ``ext`` and the directory with
       ``output_dir``."""
    stem, orig_ext = os.path.splitext(fn)
    result = stem + suffix + (orig_ext if ext is None else ext)
    if output_dir is not None:
        result = os.path.join(output_dir, os.path.basename(result))
    return result
