"""
Setup file.
"""

from setuptools import setup

URL = "https://github.com/fwbuild/fwbuild"
KEYWORDS = "xcodebuild xcframework framework cocoapods ios catalyst fat-binary build cache"


if __name__ == "__main__":
    setup(
        keywords=KEYWORDS,
        url=URL,
        include_package_data=True)
