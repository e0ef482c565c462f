"""
Language table for subtitle filenames.

Subtitle files in a release usually carry nothing but a language in their
stem ("English.srt", "2_Spanish.srt", "eng.srt"). This module maps those
tokens to a canonical language.

The table holds every ISO 639-1 language plus a few ISO 639-2 languages
that commonly ship as subtitles. Every entry is
(alpha2, alpha3/B, alpha3/T, English name, extra names).
alpha2 is None for languages without an ISO 639-1 code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache


@dataclass(frozen=True)
class Language:
    alpha3: str
    name: str
    alpha2: str | None = field(default=None, compare=False)

    @property
    def tag(self) -> str:
        """Preferred code for output filenames (2-letter if one exists)."""
        return self.alpha2 or self.alpha3

    def __str__(self) -> str:
        return self.name


# fmt: off
LANGUAGE_TABLE: tuple[tuple[str | None, str, str, str, tuple[str, ...]], ...] = (
    ("aa", "aar", "aar", "Afar", ()),
    ("ab", "abk", "abk", "Abkhazian", ("Abkhaz",)),
    ("ae", "ave", "ave", "Avestan", ()),
    ("af", "afr", "afr", "Afrikaans", ()),
    ("ak", "aka", "aka", "Akan", ()),
    ("am", "amh", "amh", "Amharic", ()),
    ("an", "arg", "arg", "Aragonese", ()),
    ("ar", "ara", "ara", "Arabic", ()),
    ("as", "asm", "asm", "Assamese", ()),
    ("av", "ava", "ava", "Avaric", ()),
    ("ay", "aym", "aym", "Aymara", ()),
    ("az", "aze", "aze", "Azerbaijani", ("Azeri",)),
    ("ba", "bak", "bak", "Bashkir", ()),
    ("be", "bel", "bel", "Belarusian", ()),
    ("bg", "bul", "bul", "Bulgarian", ()),
    ("bh", "bih", "bih", "Bihari", ()),
    ("bi", "bis", "bis", "Bislama", ()),
    ("bm", "bam", "bam", "Bambara", ()),
    ("bn", "ben", "ben", "Bengali", ("Bangla",)),
    ("bo", "tib", "bod", "Tibetan", ()),
    ("br", "bre", "bre", "Breton", ()),
    ("bs", "bos", "bos", "Bosnian", ()),
    ("ca", "cat", "cat", "Catalan", ("Català", "Valencian")),
    ("ce", "che", "che", "Chechen", ()),
    ("ch", "cha", "cha", "Chamorro", ()),
    ("co", "cos", "cos", "Corsican", ()),
    ("cr", "cre", "cre", "Cree", ()),
    ("cs", "cze", "ces", "Czech", ("Čeština",)),
    ("cu", "chu", "chu", "Church Slavic", ("Old Church Slavonic",)),
    ("cv", "chv", "chv", "Chuvash", ()),
    ("cy", "wel", "cym", "Welsh", ()),
    ("da", "dan", "dan", "Danish", ("Dansk",)),
    ("de", "ger", "deu", "German", ("Deutsch",)),
    ("dv", "div", "div", "Divehi", ("Dhivehi", "Maldivian")),
    ("dz", "dzo", "dzo", "Dzongkha", ()),
    ("ee", "ewe", "ewe", "Ewe", ()),
    ("el", "gre", "ell", "Greek", ("Modern Greek",)),
    ("en", "eng", "eng", "English", ()),
    ("eo", "epo", "epo", "Esperanto", ()),
    ("es", "spa", "spa", "Spanish", ("Español", "Castilian")),
    ("et", "est", "est", "Estonian", ()),
    ("eu", "baq", "eus", "Basque", ()),
    ("fa", "per", "fas", "Persian", ("Farsi",)),
    ("ff", "ful", "ful", "Fulah", ("Fula",)),
    ("fi", "fin", "fin", "Finnish", ("Suomi",)),
    ("fj", "fij", "fij", "Fijian", ()),
    ("fo", "fao", "fao", "Faroese", ()),
    ("fr", "fre", "fra", "French", ("Français",)),
    ("fy", "fry", "fry", "Western Frisian", ("Frisian",)),
    ("ga", "gle", "gle", "Irish", ()),
    ("gd", "gla", "gla", "Scottish Gaelic", ("Gaelic",)),
    ("gl", "glg", "glg", "Galician", ()),
    ("gn", "grn", "grn", "Guarani", ()),
    ("gu", "guj", "guj", "Gujarati", ()),
    ("gv", "glv", "glv", "Manx", ()),
    ("ha", "hau", "hau", "Hausa", ()),
    ("he", "heb", "heb", "Hebrew", ()),
    ("hi", "hin", "hin", "Hindi", ()),
    ("ho", "hmo", "hmo", "Hiri Motu", ()),
    ("hr", "hrv", "hrv", "Croatian", ("Hrvatski",)),
    ("ht", "hat", "hat", "Haitian", ("Haitian Creole",)),
    ("hu", "hun", "hun", "Hungarian", ("Magyar",)),
    ("hy", "arm", "hye", "Armenian", ()),
    ("hz", "her", "her", "Herero", ()),
    ("ia", "ina", "ina", "Interlingua", ()),
    ("id", "ind", "ind", "Indonesian", ("Bahasa Indonesia",)),
    ("ie", "ile", "ile", "Interlingue", ("Occidental",)),
    ("ig", "ibo", "ibo", "Igbo", ()),
    ("ii", "iii", "iii", "Sichuan Yi", ("Nuosu",)),
    ("ik", "ipk", "ipk", "Inupiaq", ()),
    ("io", "ido", "ido", "Ido", ()),
    ("is", "ice", "isl", "Icelandic", ()),
    ("it", "ita", "ita", "Italian", ("Italiano",)),
    ("iu", "iku", "iku", "Inuktitut", ()),
    ("ja", "jpn", "jpn", "Japanese", ()),
    ("jv", "jav", "jav", "Javanese", ()),
    ("ka", "geo", "kat", "Georgian", ()),
    ("kg", "kon", "kon", "Kongo", ()),
    ("ki", "kik", "kik", "Kikuyu", ("Gikuyu",)),
    ("kj", "kua", "kua", "Kuanyama", ("Kwanyama",)),
    ("kk", "kaz", "kaz", "Kazakh", ()),
    ("kl", "kal", "kal", "Kalaallisut", ("Greenlandic",)),
    ("km", "khm", "khm", "Khmer", ("Central Khmer",)),
    ("kn", "kan", "kan", "Kannada", ()),
    ("ko", "kor", "kor", "Korean", ()),
    ("kr", "kau", "kau", "Kanuri", ()),
    ("ks", "kas", "kas", "Kashmiri", ()),
    ("ku", "kur", "kur", "Kurdish", ()),
    ("kv", "kom", "kom", "Komi", ()),
    ("kw", "cor", "cor", "Cornish", ()),
    ("ky", "kir", "kir", "Kirghiz", ("Kyrgyz",)),
    ("la", "lat", "lat", "Latin", ()),
    ("lb", "ltz", "ltz", "Luxembourgish", ("Letzeburgesch",)),
    ("lg", "lug", "lug", "Ganda", ("Luganda",)),
    ("li", "lim", "lim", "Limburgish", ("Limburgan",)),
    ("ln", "lin", "lin", "Lingala", ()),
    ("lo", "lao", "lao", "Lao", ()),
    ("lt", "lit", "lit", "Lithuanian", ()),
    ("lu", "lub", "lub", "Luba-Katanga", ()),
    ("lv", "lav", "lav", "Latvian", ()),
    ("mg", "mlg", "mlg", "Malagasy", ()),
    ("mh", "mah", "mah", "Marshallese", ()),
    ("mi", "mao", "mri", "Maori", ("Māori",)),
    ("mk", "mac", "mkd", "Macedonian", ()),
    ("ml", "mal", "mal", "Malayalam", ()),
    ("mn", "mon", "mon", "Mongolian", ()),
    ("mr", "mar", "mar", "Marathi", ()),
    ("ms", "may", "msa", "Malay", ()),
    ("mt", "mlt", "mlt", "Maltese", ()),
    ("my", "bur", "mya", "Burmese", ()),
    ("na", "nau", "nau", "Nauru", ()),
    ("nb", "nob", "nob", "Norwegian Bokmål", ("Bokmål",)),
    ("nd", "nde", "nde", "North Ndebele", ()),
    ("ne", "nep", "nep", "Nepali", ()),
    ("ng", "ndo", "ndo", "Ndonga", ()),
    ("nl", "dut", "nld", "Dutch", ("Flemish", "Nederlands")),
    ("nn", "nno", "nno", "Norwegian Nynorsk", ("Nynorsk",)),
    ("no", "nor", "nor", "Norwegian", ("Norsk",)),
    ("nr", "nbl", "nbl", "South Ndebele", ()),
    ("nv", "nav", "nav", "Navajo", ("Navaho",)),
    ("ny", "nya", "nya", "Chichewa", ("Chewa", "Nyanja")),
    ("oc", "oci", "oci", "Occitan", ()),
    ("oj", "oji", "oji", "Ojibwa", ()),
    ("om", "orm", "orm", "Oromo", ()),
    ("or", "ori", "ori", "Oriya", ("Odia",)),
    ("os", "oss", "oss", "Ossetian", ("Ossetic",)),
    ("pa", "pan", "pan", "Punjabi", ("Panjabi",)),
    ("pi", "pli", "pli", "Pali", ()),
    ("pl", "pol", "pol", "Polish", ("Polski",)),
    ("ps", "pus", "pus", "Pashto", ("Pushto",)),
    ("pt", "por", "por", "Portuguese", ("Português",)),
    ("qu", "que", "que", "Quechua", ()),
    ("rm", "roh", "roh", "Romansh", ()),
    ("rn", "run", "run", "Rundi", ("Kirundi",)),
    ("ro", "rum", "ron", "Romanian", ("Moldavian", "Română")),
    ("ru", "rus", "rus", "Russian", ()),
    ("rw", "kin", "kin", "Kinyarwanda", ()),
    ("sa", "san", "san", "Sanskrit", ()),
    ("sc", "srd", "srd", "Sardinian", ()),
    ("sd", "snd", "snd", "Sindhi", ()),
    ("se", "sme", "sme", "Northern Sami", ()),
    ("sg", "sag", "sag", "Sango", ()),
    ("si", "sin", "sin", "Sinhala", ("Sinhalese",)),
    ("sk", "slo", "slk", "Slovak", ()),
    ("sl", "slv", "slv", "Slovenian", ("Slovene",)),
    ("sm", "smo", "smo", "Samoan", ()),
    ("sn", "sna", "sna", "Shona", ()),
    ("so", "som", "som", "Somali", ()),
    ("sq", "alb", "sqi", "Albanian", ()),
    ("sr", "srp", "srp", "Serbian", ()),
    ("ss", "ssw", "ssw", "Swati", ("Swazi",)),
    ("st", "sot", "sot", "Southern Sotho", ("Sesotho",)),
    ("su", "sun", "sun", "Sundanese", ()),
    ("sv", "swe", "swe", "Swedish", ("Svenska",)),
    ("sw", "swa", "swa", "Swahili", ()),
    ("ta", "tam", "tam", "Tamil", ()),
    ("te", "tel", "tel", "Telugu", ()),
    ("tg", "tgk", "tgk", "Tajik", ()),
    ("th", "tha", "tha", "Thai", ()),
    ("ti", "tir", "tir", "Tigrinya", ()),
    ("tk", "tuk", "tuk", "Turkmen", ()),
    ("tl", "tgl", "tgl", "Tagalog", ()),
    ("tn", "tsn", "tsn", "Tswana", ()),
    ("to", "ton", "ton", "Tonga", ("Tongan",)),
    ("tr", "tur", "tur", "Turkish", ("Türkçe",)),
    ("ts", "tso", "tso", "Tsonga", ()),
    ("tt", "tat", "tat", "Tatar", ()),
    ("tw", "twi", "twi", "Twi", ()),
    ("ty", "tah", "tah", "Tahitian", ()),
    ("ug", "uig", "uig", "Uighur", ("Uyghur",)),
    ("uk", "ukr", "ukr", "Ukrainian", ()),
    ("ur", "urd", "urd", "Urdu", ()),
    ("uz", "uzb", "uzb", "Uzbek", ()),
    ("ve", "ven", "ven", "Venda", ()),
    ("vi", "vie", "vie", "Vietnamese", ("Tiếng Việt",)),
    ("vo", "vol", "vol", "Volapük", ()),
    ("wa", "wln", "wln", "Walloon", ()),
    ("wo", "wol", "wol", "Wolof", ()),
    ("xh", "xho", "xho", "Xhosa", ()),
    ("yi", "yid", "yid", "Yiddish", ()),
    ("yo", "yor", "yor", "Yoruba", ()),
    ("za", "zha", "zha", "Zhuang", ()),
    ("zh", "chi", "zho", "Chinese", ()),
    ("zu", "zul", "zul", "Zulu", ()),
    (None, "fil", "fil", "Filipino", ()),
    (None, "yue", "yue", "Cantonese", ()),
    (None, "haw", "haw", "Hawaiian", ()),
    (None, "mni", "mni", "Manipuri", ()),
)
# fmt: on


@lru_cache(maxsize=1)
def _language_index() -> dict[str, Language]:
    """Build the lookup index once; the result is shared read-only."""
    index: dict[str, Language] = {}
    for alpha2, alpha3_b, alpha3_t, name, extra in LANGUAGE_TABLE:
        language = Language(alpha3=alpha3_t, name=name, alpha2=alpha2)
        keys = [alpha3_b, alpha3_t, name, *extra]
        if alpha2:
            keys.append(alpha2)
        for key in keys:
            index.setdefault(key.casefold(), language)
    return index


def lookup_language(token: str) -> Language | None:
    """Return the language for a name or ISO 639 code, or None."""
    return _language_index().get(token.strip().casefold())


def all_languages() -> list[Language]:
    """Every known language, sorted by English name."""
    seen: dict[str, Language] = {}
    for language in _language_index().values():
        seen.setdefault(language.alpha3, language)
    return sorted(seen.values(), key=lambda lang: lang.name)
