from __future__ import annotations

import importlib.metadata
import os

PACKAGE_NAME = "receipt-points"


def package_version() -> str:
	try:
		return importlib.metadata.version(PACKAGE_NAME)
	except importlib.metadata.PackageNotFoundError:
		return "unknown"


def get_version_info() -> dict[str, str]:
	# build metadata is stamped into the environment by the image build
	return {
		"version": package_version(),
		"build_time": os.getenv("BUILD_TIME", "unknown"),
		"git_commit": os.getenv("GIT_COMMIT", "unknown"),
		"git_branch": os.getenv("GIT_BRANCH", "unknown"),
	}
