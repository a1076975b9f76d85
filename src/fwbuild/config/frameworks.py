"""
Framework naming conventions.

xcodebuild names products after the target's PRODUCT_NAME, which for a few
targets differs from the scheme name used to build them.
"""

FRAMEWORK_EXTENSION = "framework"
XCFRAMEWORK_EXTENSION = "xcframework"

# Anything not listed keeps its own name
REAL_FRAMEWORK_NAMES = {
    "PromisesObjC": "FBLPromises",
    "Protobuf": "protobuf",
}


def real_framework_name(framework: str) -> str:
    """
    Get the product name xcodebuild uses for a target.

    Args:
        framework: Configured target (scheme) name

    Returns:
        The product name, or the target name itself when it is not remapped
    """
    return REAL_FRAMEWORK_NAMES.get(framework, framework)
