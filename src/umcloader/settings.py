# Copyright 2026 umcloader Contributors
# SPDX-License-Identifier: Apache-2.0

"""Upstream locations and timeouts used when resolving the core library."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

# ###############
# Public Interface
# ###############

DEFAULT_UPSTREAM_REPOSITORY = "https://github.com/TeamOpenIndustry/UniversalModCore.git"
DEFAULT_MAVEN_URL = "https://teamopenindustry.cc/maven"

ENV_UPSTREAM_REPOSITORY = "UMCLOADER_UPSTREAM_REPOSITORY"
ENV_MAVEN_URL = "UMCLOADER_MAVEN_URL"


@dataclass(frozen=True)
class UpstreamSettings:
    """Where the core library lives and how long to wait for it.

    Attributes:
        upstream_repository: Git URL cloned when the core version is ``latest``.
        maven_url: Base URL of the Maven repository hosting released binaries.
        build_file: Name of the build file that carries the version line.
        version_prefix: Line prefix of the version assignment in *build_file*.
        git_timeout: Seconds allowed for a single git command.
        download_timeout: Seconds allowed to connect to or read from *maven_url*.
    """

    upstream_repository: str = DEFAULT_UPSTREAM_REPOSITORY
    maven_url: str = DEFAULT_MAVEN_URL
    build_file: str = "build.gradle"
    version_prefix: str = "String umcVersion = "
    git_timeout: int = 300
    download_timeout: int = 60

    @classmethod
    def from_env(cls) -> UpstreamSettings:
        """Return the defaults with URLs overridden from the environment."""
        settings = cls()
        upstream = os.environ.get(ENV_UPSTREAM_REPOSITORY)
        if upstream:
            settings = replace(settings, upstream_repository=upstream)
        maven_url = os.environ.get(ENV_MAVEN_URL)
        if maven_url:
            settings = replace(settings, maven_url=maven_url.rstrip("/"))
        return settings
