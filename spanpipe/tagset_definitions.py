"""
Canonical tag set tables.

Hard-coded mappings from the raw tags emitted by the supported annotators to
Universal POS categories (for POS tag sets) and coarse entity categories (for
NER tag sets). Each table is assigned to the languages whose models emit it.
"""

from __future__ import annotations

from typing import Dict, List, Tuple

from .tags import STANDARD_UPOS, NerTag, PosTag, TagSet

# Penn Treebank (English CoreNLP, stanza xpos, spaCy tag_)
PENN_TREEBANK: Dict[str, str] = {
    "CC": "CCONJ", "CD": "NUM", "DT": "DET", "EX": "PRON", "FW": "X", "IN": "ADP",
    "JJ": "ADJ", "JJR": "ADJ", "JJS": "ADJ", "LS": "X", "MD": "AUX",
    "NN": "NOUN", "NNS": "NOUN", "NNP": "PROPN", "NNPS": "PROPN",
    "PDT": "DET", "POS": "PART", "PRP": "PRON", "PRP$": "PRON",
    "RB": "ADV", "RBR": "ADV", "RBS": "ADV", "RP": "ADP", "SYM": "SYM", "TO": "PART",
    "UH": "INTJ", "VB": "VERB", "VBD": "VERB", "VBG": "VERB", "VBN": "VERB",
    "VBP": "VERB", "VBZ": "VERB", "WDT": "DET", "WP": "PRON", "WP$": "PRON", "WRB": "ADV",
    ".": "PUNCT", ",": "PUNCT", ":": "PUNCT", "``": "PUNCT", "''": "PUNCT",
    "-LRB-": "PUNCT", "-RRB-": "PUNCT", "HYPH": "PUNCT", "NFP": "PUNCT",
    "$": "SYM", "#": "SYM", "ADD": "X", "AFX": "ADJ", "GW": "X", "XX": "X",
}

# Stuttgart-Tuebingen tag set (German)
STTS: Dict[str, str] = {
    "ADJA": "ADJ", "ADJD": "ADJ", "ADV": "ADV",
    "APPR": "ADP", "APPRART": "ADP", "APPO": "ADP", "APZR": "ADP",
    "ART": "DET", "CARD": "NUM", "FM": "X", "ITJ": "INTJ",
    "KOUI": "SCONJ", "KOUS": "SCONJ", "KON": "CCONJ", "KOKOM": "CCONJ",
    "NN": "NOUN", "NE": "PROPN",
    "PDS": "PRON", "PDAT": "DET", "PIS": "PRON", "PIAT": "DET", "PIDAT": "DET",
    "PPER": "PRON", "PPOSS": "PRON", "PPOSAT": "DET", "PRELS": "PRON", "PRELAT": "DET",
    "PRF": "PRON", "PWS": "PRON", "PWAT": "DET", "PWAV": "ADV", "PAV": "ADV", "PROAV": "ADV",
    "PTKZU": "PART", "PTKNEG": "PART", "PTKVZ": "ADP", "PTKANT": "INTJ", "PTKA": "PART",
    "TRUNC": "X",
    "VVFIN": "VERB", "VVIMP": "VERB", "VVINF": "VERB", "VVIZU": "VERB", "VVPP": "VERB",
    "VAFIN": "AUX", "VAIMP": "AUX", "VAINF": "AUX", "VAPP": "AUX",
    "VMFIN": "AUX", "VMINF": "AUX", "VMPP": "AUX",
    "XY": "X", "$,": "PUNCT", "$.": "PUNCT", "$(": "PUNCT",
}

# French Treebank tags as used by CoreNLP's French models
FRENCH_TREEBANK: Dict[str, str] = {
    "A": "ADJ", "ADJ": "ADJ", "ADJWH": "ADJ", "ADV": "ADV", "ADVWH": "ADV",
    "C": "CCONJ", "CC": "CCONJ", "CS": "SCONJ",
    "CL": "PRON", "CLO": "PRON", "CLR": "PRON", "CLS": "PRON",
    "D": "DET", "DET": "DET", "DETWH": "DET", "ET": "X", "I": "INTJ",
    "N": "NOUN", "NC": "NOUN", "NPP": "PROPN",
    "P": "ADP", "P+D": "ADP", "P+PRO": "ADP", "PREF": "X",
    "PRO": "PRON", "PROREL": "PRON", "PROWH": "PRON", "PUNC": "PUNCT",
    "V": "VERB", "VIMP": "VERB", "VINF": "VERB", "VPP": "VERB", "VPR": "VERB", "VS": "VERB",
}

# Penn Chinese Treebank
CHINESE_TREEBANK: Dict[str, str] = {
    "AD": "ADV", "AS": "PART", "BA": "ADP", "CC": "CCONJ", "CD": "NUM", "CS": "SCONJ",
    "DEC": "PART", "DEG": "PART", "DER": "PART", "DEV": "PART", "DT": "DET",
    "ETC": "PART", "FW": "X", "IJ": "INTJ", "JJ": "ADJ", "LB": "ADP", "LC": "ADP",
    "M": "NOUN", "MSP": "PART", "NN": "NOUN", "NR": "PROPN", "NT": "NOUN", "OD": "NUM",
    "ON": "X", "P": "ADP", "PN": "PRON", "PU": "PUNCT", "SB": "ADP", "SP": "PART",
    "VA": "VERB", "VC": "VERB", "VE": "VERB", "VV": "VERB",
}

# Universal POS tags map to themselves
UNIVERSAL_POS: Dict[str, str] = {tag: tag for tag in sorted(STANDARD_UPOS)}

# CoreNLP English labels plus the OntoNotes labels emitted by stanza/spaCy English models
ENGLISH_NER: Dict[str, str] = {
    "PERSON": "PER", "LOCATION": "LOC", "ORGANIZATION": "ORG", "MISC": "MISC",
    "CITY": "LOC", "STATE_OR_PROVINCE": "LOC", "COUNTRY": "LOC",
    "NATIONALITY": "MISC", "RELIGION": "MISC", "TITLE": "MISC", "IDEOLOGY": "MISC",
    "CRIMINAL_CHARGE": "MISC", "CAUSE_OF_DEATH": "MISC",
    "DATE": "DATE", "TIME": "TIME", "DURATION": "DATE", "SET": "DATE",
    "MONEY": "MONEY", "PERCENT": "PERCENT", "NUMBER": "NUM", "ORDINAL": "NUM",
    "EMAIL": "MISC", "URL": "MISC", "HANDLE": "MISC",
    "NORP": "MISC", "FAC": "LOC", "ORG": "ORG", "GPE": "LOC", "LOC": "LOC",
    "PRODUCT": "MISC", "EVENT": "MISC", "WORK_OF_ART": "MISC", "LAW": "MISC",
    "LANGUAGE": "MISC", "QUANTITY": "NUM", "CARDINAL": "NUM",
}

# CoNLL 2002/2003 style labels plus the long-form and Spanish CoreNLP variants
CONLL_NER: Dict[str, str] = {
    "PER": "PER", "LOC": "LOC", "ORG": "ORG", "MISC": "MISC",
    "PERSON": "PER", "LOCATION": "LOC", "ORGANIZATION": "ORG",
    "PERS": "PER", "LUG": "LOC", "OTROS": "MISC",
}

# CoreNLP Chinese labels
CHINESE_NER: Dict[str, str] = {
    "PERSON": "PER", "LOCATION": "LOC", "ORGANIZATION": "ORG", "GPE": "LOC",
    "FACILITY": "LOC", "DEMONYM": "MISC", "MISC": "MISC",
    "DATE": "DATE", "TIME": "TIME", "MONEY": "MONEY", "PERCENT": "PERCENT",
    "NUMBER": "NUM", "ORDINAL": "NUM",
}

UD_LANGUAGES = (
    "ca", "cs", "da", "el", "es", "et", "fi", "hr", "hu", "it", "lt", "lv", "nl",
    "no", "pl", "pt", "ro", "ru", "sk", "sl", "sr", "sv", "uk",
)
CONLL_NER_LANGUAGES = ("de", "es", "fr", "it", "nl", "pt", "ru")

# (name, languages, table)
POS_TAGSETS: List[Tuple[str, Tuple[str, ...], Dict[str, str]]] = [
    ("penn-treebank", ("en",), PENN_TREEBANK),
    ("stts", ("de",), STTS),
    ("french-treebank", ("fr",), FRENCH_TREEBANK),
    ("chinese-treebank", ("zh",), CHINESE_TREEBANK),
    ("universal-pos", UD_LANGUAGES, UNIVERSAL_POS),
]

NER_TAGSETS: List[Tuple[str, Tuple[str, ...], Dict[str, str]]] = [
    ("english-ner", ("en",), ENGLISH_NER),
    ("conll-ner", CONLL_NER_LANGUAGES, CONLL_NER),
    ("chinese-ner", ("zh",), CHINESE_NER),
]


def build_default_pos_tagsets() -> List[TagSet[PosTag]]:
    return [TagSet.pos(name, languages, table) for name, languages, table in POS_TAGSETS]


def build_default_ner_tagsets() -> List[TagSet[NerTag]]:
    return [TagSet.ner(name, languages, table) for name, languages, table in NER_TAGSETS]
