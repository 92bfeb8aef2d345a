"""Module for retrieving the text of data files from the local file system or the web

Copyright 2023 The meataxe Authors and Infleqtion Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import gzip
import os
import urllib.error
import urllib.request

import meataxe.cache
from meataxe.errors import SourceUnavailableError

CACHE_NAME = "meataxe_sources"
URL_PREFIXES = ("http://", "https://")


def get_text(filename: str) -> str:
    """Retrieve the contents of a (possibly gzipped) text file, given by its path or URL."""
    if filename.startswith(URL_PREFIXES):
        return get_text_from_url(filename)
    return get_text_from_file(filename)


@meataxe.cache.use_disk_cache(CACHE_NAME)
def get_text_from_url(url: str) -> str:
    """Download a text file."""
    try:
        page = urllib.request.urlopen(url)
        data = page.read()
    except (urllib.error.URLError, urllib.error.HTTPError) as error:
        raise SourceUnavailableError(f"File {url} not found: {error}")
    if url.endswith(".gz"):
        data = gzip.decompress(data)
    return data.decode("utf-8")


def get_text_from_file(path: str) -> str:
    """Read a local text file, which may be gzipped.

    If the file does not exist, we look for a gzipped version of the file.
    """
    if not os.path.isfile(path):
        if os.path.isfile(path + ".gz"):
            path += ".gz"
        else:
            raise SourceUnavailableError(f"No local file {path}(.gz) found")

    if path.endswith(".gz"):
        with gzip.open(path, "rt", encoding="utf-8") as file:
            return file.read()
    with open(path, encoding="utf-8") as file:
        return file.read()
