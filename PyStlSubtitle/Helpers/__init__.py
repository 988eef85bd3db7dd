import os

def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.

    Args:
        filepath: Input file path

    Returns:
        str: Normalized path preserving original extension
        None: If filepath is None
    """
    if not filepath:
        return None
    return os.path.normpath(filepath)

def GetOutputPath(filepath : str|None, format_extension : str|None = None) -> str|None:
    """
    Generate an output path alongside the input file with the target format extension.

    Args:
        filepath: Input file path to base output path on
        format_extension: Target format extension (e.g., '.stl', '.srt'). If None, infers from input filepath.

    Returns:
        str: Output path with format: "basename.extension"
        None: If filepath is None
    """
    if not filepath:
        return None

    directory = os.path.dirname(filepath)
    basename, current_extension = os.path.splitext(os.path.basename(filepath))

    if format_extension:
        target_extension = format_extension if format_extension.startswith('.') else f'.{format_extension}'
    else:
        target_extension = current_extension or '.stl'

    # Avoid overwriting the input when converting to the same format
    if target_extension.lower() == current_extension.lower():
        basename = f"{basename}.converted"

    output_path = os.path.join(directory, f"{basename}{target_extension.lower()}")
    return os.path.normpath(output_path)
