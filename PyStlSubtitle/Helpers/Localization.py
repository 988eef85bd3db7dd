import gettext
import os

_locales_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'locales')

# Falls back to the untranslated messages when no catalogue exists for the user's language
_translation = gettext.translation('pystlsubtitle', localedir=_locales_dir, fallback=True)

def _(message : str) -> str:
    """ Translate a user-facing message """
    return _translation.gettext(message)
