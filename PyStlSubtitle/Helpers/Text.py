import regex

# SSA/ASS override blocks such as {\an8} or {\i1\fs20}
_SSA_TAG_PATTERN = regex.compile(r'\{\\[^}]*\}')

def RemoveSsaTags(text : str) -> str:
    """
    Strip SSA override blocks, leaving HTML-style markup untouched
    """
    if not text or '{' not in text:
        return text
    return _SSA_TAG_PATTERN.sub('', text)

def CountTagInText(text : str, tag : str) -> int:
    """
    Count non-overlapping occurrences of a literal tag in the text
    """
    if not text or not tag:
        return 0
    return text.count(tag)

def NormaliseLineBreaks(text : str) -> str:
    """ Convert Windows and classic Mac line endings to '\\n' """
    return text.replace('\r\n', '\n').replace('\r', '\n')
