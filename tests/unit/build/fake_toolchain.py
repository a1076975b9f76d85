"""Fake xcodebuild used by the build component tests."""

from pathlib import Path
from typing import List, Optional

from fwbuild.build.process_executor import ProcessResult


class FakeToolchain:
    """Stands in for ProcessExecutor running xcodebuild.

    Build invocations succeed unless their ARCHS value matches fail_archs.
    -create-xcframework invocations create the output directory with an
    Info.plist recording how many times the merge ran.
    """

    def __init__(self, fail_archs: Optional[str] = None, combine_returncode: int = 0):
        self.fail_archs = fail_archs
        self.combine_returncode = combine_returncode
        self.calls: List[tuple] = []
        self.combine_count = 0

    def run(self, command, args=None, capture_output=False):
        args = list(args or [])
        self.calls.append((command, args, capture_output))

        if args and args[0] == "-create-xcframework":
            if self.combine_returncode != 0:
                return ProcessResult(False, self.combine_returncode, "error: equivalent library definitions")
            self.combine_count += 1
            output = Path(args[2])
            output.mkdir(parents=True)
            (output / "Info.plist").write_text(f"build {self.combine_count}")
            return ProcessResult(True, 0, f"xcframework successfully written out to: {output}")

        archs = next(arg for arg in args if arg.startswith("ARCHS="))
        if self.fail_archs is not None and archs == f"ARCHS={self.fail_archs}":
            return ProcessResult(False, 65, "error: no such module\n** BUILD FAILED **")
        return ProcessResult(True, 0, "** BUILD SUCCEEDED **")

    @property
    def build_calls(self):
        return [call for call in self.calls if call[1] and call[1][0] == "build"]

    @property
    def combine_calls(self):
        return [call for call in self.calls if call[1] and call[1][0] == "-create-xcframework"]
