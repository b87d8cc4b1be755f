"""Double Metaphone rule table.

Each letter class maps to an ordered tuple of sub-rules. A sub-rule takes
the padded word, the cursor position and the code buffers. When its
context matches it emits tokens and returns how far the cursor advances
(1 to 4); otherwise it returns None and the next sub-rule is tried. The
last sub-rule of every class always fires.

Order inside each tuple is significant: specific digraphs, trigraphs and
language-of-origin spellings come before the generic fallback.

Rules derive from Lawrence Philips' Double Metaphone as revised by
Kevin Atkinson (aspell dmetaph.cpp).
"""

from typing import Callable

from .emit import CodeBuffers
from .word import PaddedWord, is_slavo_germanic

Rule = Callable[[PaddedWord, int, CodeBuffers], "int | None"]


def _germanic_prefix(w: PaddedWord) -> bool:
    """'van ', 'von ' or 'sch' at the start of the word."""
    return w.string_at(0, 4, "VAN ", "VON ") or w.string_at(0, 3, "SCH")


# ---- Vowels ----

def vowel(w, i, out):
    # only an initial vowel is coded; all map to 'A'
    if i == 0:
        out.add("A")
    return 1


# ---- B ----

def b_default(w, i, out):
    # '-mb' as in 'dumb' is consumed by the M rule
    out.add("P")
    return 2 if w.at(i + 1) == "B" else 1


# ---- Ç ----

def c_cedilla(w, i, out):
    out.add("S")
    return 1


# ---- C ----

def c_germanic_ach(w, i, out):
    """'bacher', 'macher' and other Germanic -ach-."""
    if (i > 1
            and not w.is_vowel(i - 2)
            and w.string_at(i - 1, 3, "ACH")
            and w.at(i + 2) != "I"
            and (w.at(i + 2) != "E"
                 or w.string_at(i - 2, 6, "BACHER", "MACHER"))):
        out.add("K")
        return 2
    return None


def c_caesar(w, i, out):
    if i == 0 and w.string_at(i, 6, "CAESAR"):
        out.add("S")
        return 2
    return None


def c_chianti(w, i, out):
    if w.string_at(i, 4, "CHIA"):
        out.add("K")
        return 2
    return None


def c_michael(w, i, out):
    if i > 0 and w.string_at(i, 4, "CHAE"):
        out.add("K", "X")
        return 2
    return None


def c_greek_ch(w, i, out):
    """Initial Greek roots: 'chemistry', 'chorus', but not 'chore'."""
    if (i == 0
            and (w.string_at(i + 1, 5, "HARAC", "HARIS")
                 or w.string_at(i + 1, 3, "HOR", "HYM", "HIA", "HEM"))
            and not w.string_at(0, 5, "CHORE")):
        out.add("K")
        return 2
    return None


def c_ch(w, i, out):
    if not w.string_at(i, 2, "CH"):
        return None
    if (_germanic_prefix(w)
            # 'architect', but not 'arch', 'orchestra', 'orchid'
            or w.string_at(i - 2, 6, "ORCHES", "ARCHIT", "ORCHID")
            or w.string_at(i + 2, 1, "T", "S")
            # 'wachtler', 'wechsler', but not 'tichner'
            or ((w.string_at(i - 1, 1, "A", "O", "U", "E") or i == 0)
                and w.string_at(i + 2, 1, "L", "R", "N", "M", "B", "H",
                                "F", "V", "W", " "))):
        out.add("K")
    elif i > 0:
        if w.string_at(0, 2, "MC"):
            # 'McHugh'
            out.add("K")
        else:
            out.add("X", "K")
    else:
        out.add("X")
    return 2


def c_czerny(w, i, out):
    if w.string_at(i, 2, "CZ") and not w.string_at(i - 2, 4, "WICZ"):
        out.add("S", "X")
        return 2
    return None


def c_focaccia(w, i, out):
    if w.string_at(i + 1, 3, "CIA"):
        out.add("X")
        return 3
    return None


def c_double(w, i, out):
    """Double C, but not 'McClellan'."""
    if not w.string_at(i, 2, "CC") or (i == 1 and w.at(0) == "M"):
        return None
    # 'bellocchio', but not 'bacchus'
    if w.string_at(i + 2, 1, "I", "E", "H") and not w.string_at(i + 2, 2, "HU"):
        # 'accident', 'accede', 'succeed'
        if ((i == 1 and w.at(i - 1) == "A")
                or w.string_at(i - 1, 5, "UCCEE", "UCCES")):
            out.add("KS")
        else:
            # 'bacci', 'bertucci'
            out.add("X")
        return 3
    # Pierce's rule
    out.add("K")
    return 2


def c_hard_digraph(w, i, out):
    if w.string_at(i, 2, "CK", "CG", "CQ"):
        out.add("K")
        return 2
    return None


def c_soft(w, i, out):
    if not w.string_at(i, 2, "CI", "CE", "CY"):
        return None
    # italian vs. english
    if w.string_at(i, 3, "CIO", "CIE", "CIA"):
        out.add("S", "X")
    else:
        out.add("S")
    return 2


def c_default(w, i, out):
    out.add("K")
    # 'mac caffrey', 'mac gregor'
    if w.string_at(i + 1, 2, " C", " Q", " G"):
        return 3
    if (w.string_at(i + 1, 1, "C", "K", "Q")
            and not w.string_at(i + 1, 2, "CE", "CI")):
        return 2
    return 1


# ---- D ----

def d_dg(w, i, out):
    if not w.string_at(i, 2, "DG"):
        return None
    if w.string_at(i + 2, 1, "I", "E", "Y"):
        # 'edge'
        out.add("J")
        return 3
    # 'edgar'
    out.add("TK")
    return 2


def d_double(w, i, out):
    if w.string_at(i, 2, "DT", "DD"):
        out.add("T")
        return 2
    return None


def d_default(w, i, out):
    out.add("T")
    return 1


# ---- F ----

def f_default(w, i, out):
    out.add("F")
    return 2 if w.at(i + 1) == "F" else 1


# ---- G ----

def g_gh(w, i, out):
    if w.at(i + 1) != "H":
        return None
    if i > 0 and not w.is_vowel(i - 1):
        out.add("K")
        return 2
    if i == 0:
        # 'ghislane', 'ghiradelli'
        out.add("J" if w.at(i + 2) == "I" else "K")
        return 2
    # Parker's rule: 'hugh', 'bough', 'broughton' stay silent
    if not ((i > 1 and w.string_at(i - 2, 1, "B", "H", "D"))
            or (i > 2 and w.string_at(i - 3, 1, "B", "H", "D"))
            or (i > 3 and w.string_at(i - 4, 1, "B", "H"))):
        # 'laugh', 'McLaughlin', 'cough', 'gough', 'rough', 'tough'
        if (i > 2 and w.at(i - 1) == "U"
                and w.string_at(i - 3, 1, "C", "G", "L", "R", "T")):
            out.add("F")
        elif i > 0 and w.at(i - 1) != "I":
            out.add("K")
    return 2


def g_gn(w, i, out):
    if w.at(i + 1) != "N":
        return None
    if i == 1 and w.is_vowel(0) and not is_slavo_germanic(w):
        out.add("KN", "N")
    elif not w.string_at(i + 2, 2, "EY") and not is_slavo_germanic(w):
        # not 'cagney'
        out.add("N", "KN")
    else:
        out.add("KN")
    return 2


def g_tagliaro(w, i, out):
    if w.string_at(i + 1, 2, "LI") and not is_slavo_germanic(w):
        out.add("KL", "L")
        return 2
    return None


def g_initial_soft(w, i, out):
    """-ges-, -gep-, -gel-, -gie- at the beginning."""
    if i == 0 and (w.at(i + 1) == "Y"
                   or w.string_at(i + 1, 2, "ES", "EP", "EB", "EL", "EY",
                                  "IB", "IL", "IN", "IE", "EI", "ER")):
        out.add("K", "J")
        return 2
    return None


def g_ger_gy(w, i, out):
    """-ger-, -gy-, except 'danger', 'ranger', 'manger'."""
    if ((w.string_at(i + 1, 2, "ER") or w.at(i + 1) == "Y")
            and not w.string_at(0, 6, "DANGER", "RANGER", "MANGER")
            and not w.string_at(i - 1, 1, "E", "I")
            and not w.string_at(i - 1, 3, "RGY", "OGY")):
        out.add("K", "J")
        return 2
    return None


def g_italian(w, i, out):
    """'biaggi' and other soft G before E, I, Y."""
    if not (w.string_at(i + 1, 1, "E", "I", "Y")
            or w.string_at(i - 1, 4, "AGGI", "OGGI")):
        return None
    if _germanic_prefix(w) or w.string_at(i + 1, 2, "ET"):
        out.add("K")
    elif w.string_at(i + 1, 4, "IER "):
        # french ending
        out.add("J")
    else:
        out.add("J", "K")
    return 2


def g_default(w, i, out):
    out.add("K")
    return 2 if w.at(i + 1) == "G" else 1


# ---- H ----

def h_default(w, i, out):
    # kept only when initial or between vowels, and before a vowel
    if (i == 0 or w.is_vowel(i - 1)) and w.is_vowel(i + 1):
        out.add("H")
        return 2
    return 1


# ---- J ----

def j_spanish(w, i, out):
    """'jose', 'san jacinto'."""
    if not (w.string_at(i, 4, "JOSE") or w.string_at(0, 4, "SAN ")):
        return None
    if (i == 0 and w.at(i + 4) == " ") or w.string_at(0, 4, "SAN "):
        out.add("H")
    else:
        out.add("J", "H")
    return 1


def j_default(w, i, out):
    if i == 0:
        # 'Yankelovich' / 'Jankelowicz'
        out.add("J", "A")
    elif (w.is_vowel(i - 1) and not is_slavo_germanic(w)
            and w.at(i + 1) in ("A", "O")):
        # spanish 'bajador'
        out.add("J", "H")
    elif i == w.last:
        out.add("J", " ")
    elif (not w.string_at(i + 1, 1, "L", "T", "K", "S", "N", "M", "B", "Z")
            and not w.string_at(i - 1, 1, "S", "K", "L")):
        out.add("J")
    return 2 if w.at(i + 1) == "J" else 1


# ---- K ----

def k_default(w, i, out):
    out.add("K")
    return 2 if w.at(i + 1) == "K" else 1


# ---- L ----

def l_spanish(w, i, out):
    """'cabrillo', 'gallegos'."""
    if w.at(i + 1) != "L":
        return None
    if ((i == w.length - 3
            and w.string_at(i - 1, 4, "ILLO", "ILLA", "ALLE"))
            or ((w.string_at(w.last - 1, 2, "AS", "OS")
                 or w.string_at(w.last, 1, "A", "O"))
                and w.string_at(i - 1, 4, "ALLE"))):
        out.add("L", " ")
        return 2
    return None


def l_default(w, i, out):
    out.add("L")
    return 2 if w.at(i + 1) == "L" else 1


# ---- M ----

def m_default(w, i, out):
    out.add("M")
    # 'dumb', 'thumb', 'dumber'
    if ((w.string_at(i - 1, 3, "UMB")
            and (i + 1 == w.last or w.string_at(i + 2, 2, "ER")))
            or w.at(i + 1) == "M"):
        return 2
    return 1


# ---- N, Ñ ----

def n_default(w, i, out):
    out.add("N")
    return 2 if w.at(i + 1) == "N" else 1


def n_tilde(w, i, out):
    out.add("N")
    return 1


# ---- P ----

def p_ph(w, i, out):
    if w.at(i + 1) == "H":
        out.add("F")
        return 2
    return None


def p_default(w, i, out):
    out.add("P")
    # 'campbell', 'raspberry'
    return 2 if w.string_at(i + 1, 1, "P", "B") else 1


# ---- Q ----

def q_default(w, i, out):
    out.add("K")
    return 2 if w.at(i + 1) == "Q" else 1


# ---- R ----

def r_default(w, i, out):
    # french 'rogier', but not 'hochmeier'
    if (i == w.last and not is_slavo_germanic(w)
            and w.string_at(i - 2, 2, "IE")
            and not w.string_at(i - 4, 2, "ME", "MA")):
        out.add("", "R")
    else:
        out.add("R")
    return 2 if w.at(i + 1) == "R" else 1


# ---- S ----

def s_island(w, i, out):
    """Silent S: 'island', 'isle', 'carlisle', 'carlysle'."""
    if w.string_at(i - 1, 3, "ISL", "YSL"):
        return 1
    return None


def s_sugar(w, i, out):
    if i == 0 and w.string_at(i, 5, "SUGAR"):
        out.add("X", "S")
        return 1
    return None


def s_sh(w, i, out):
    if not w.string_at(i, 2, "SH"):
        return None
    if w.string_at(i + 1, 4, "HEIM", "HOEK", "HOLM", "HOLZ"):
        # germanic
        out.add("S")
    else:
        out.add("X")
    return 2


def s_italian(w, i, out):
    """Italian and Armenian -sio-, -sia-, -sian-."""
    if not (w.string_at(i, 3, "SIO", "SIA") or w.string_at(i, 4, "SIAN")):
        return None
    if not is_slavo_germanic(w):
        out.add("S", "X")
    else:
        out.add("S")
    return 3


def s_germanic(w, i, out):
    """'smith' vs 'schmidt', 'snider' vs 'schneider', slavic -sz-."""
    if ((i == 0 and w.string_at(i + 1, 1, "M", "N", "L", "W"))
            or w.string_at(i + 1, 1, "Z")):
        out.add("S", "X")
        return 2 if w.string_at(i + 1, 1, "Z") else 1
    return None


def s_sc(w, i, out):
    if not w.string_at(i, 2, "SC"):
        return None
    # Schlesinger's rule
    if w.at(i + 2) == "H":
        # dutch origin: 'school', 'schooner'
        if w.string_at(i + 3, 2, "OO", "ER", "EN", "UY", "ED", "EM"):
            # 'schermerhorn', 'schenker'
            if w.string_at(i + 3, 2, "ER", "EN"):
                out.add("X", "SK")
            else:
                out.add("SK")
        elif i == 0 and not w.is_vowel(3) and w.at(3) != "W":
            out.add("X", "S")
        else:
            out.add("X")
        return 3
    if w.string_at(i + 2, 1, "I", "E", "Y"):
        out.add("S")
        return 3
    out.add("SK")
    return 3


def s_default(w, i, out):
    # french 'resnais', 'artois'
    if i == w.last and w.string_at(i - 2, 2, "AI", "OI"):
        out.add("", "S")
    else:
        out.add("S")
    return 2 if w.string_at(i + 1, 1, "S", "Z") else 1


# ---- T ----

def t_tion(w, i, out):
    if w.string_at(i, 4, "TION"):
        out.add("X")
        return 3
    return None


def t_tia_tch(w, i, out):
    if w.string_at(i, 3, "TIA", "TCH"):
        out.add("X")
        return 3
    return None


def t_th(w, i, out):
    if not (w.string_at(i, 2, "TH") or w.string_at(i, 3, "TTH")):
        return None
    # 'thomas', 'thames' or germanic
    if w.string_at(i + 2, 2, "OM", "AM") or _germanic_prefix(w):
        out.add("T")
    else:
        out.add("0", "T")
    return 2


def t_default(w, i, out):
    out.add("T")
    return 2 if w.string_at(i + 1, 1, "T", "D") else 1


# ---- V ----

def v_default(w, i, out):
    out.add("F")
    return 2 if w.at(i + 1) == "V" else 1


# ---- W ----

def w_wr(w, i, out):
    if w.string_at(i, 2, "WR"):
        out.add("R")
        return 2
    return None


def w_default(w, i, out):
    if i == 0 and (w.is_vowel(i + 1) or w.string_at(i, 2, "WH")):
        if w.is_vowel(i + 1):
            # 'Wasserman' should match 'Vasserman'
            out.add("A", "F")
        else:
            # 'Uomo' should match 'Womo'
            out.add("A")
    # 'Arnow' should match 'Arnoff'
    if ((i == w.last and w.is_vowel(i - 1))
            or w.string_at(i - 1, 5, "EWSKI", "EWSKY", "OWSKI", "OWSKY")
            or w.string_at(0, 3, "SCH")):
        out.add("", "F")
        return 1
    # polish 'filipowicz'
    if w.string_at(i, 4, "WICZ", "WITZ"):
        out.add("TS", "FX")
        return 4
    return 1


# ---- X ----

def x_default(w, i, out):
    # french 'breaux'
    if not (i == w.last
            and (w.string_at(i - 3, 3, "IAU", "EAU")
                 or w.string_at(i - 2, 2, "AU", "OU"))):
        out.add("KS")
    return 2 if w.string_at(i + 1, 1, "C", "X") else 1


# ---- Z ----

def z_pinyin(w, i, out):
    """Chinese pinyin 'zhao'."""
    if w.at(i + 1) == "H":
        out.add("J")
        return 2
    return None


def z_default(w, i, out):
    if (w.string_at(i + 1, 2, "ZO", "ZI", "ZA")
            or (is_slavo_germanic(w) and i > 0 and w.at(i - 1) != "T")):
        out.add("S", "TS")
    else:
        out.add("S")
    return 2 if w.at(i + 1) == "Z" else 1


VOWEL_RULES = (vowel,)

RULES: dict[str, tuple[Rule, ...]] = {
    **{v: VOWEL_RULES for v in "AEIOUY"},
    "B": (b_default,),
    "Ç": (c_cedilla,),
    "C": (c_germanic_ach, c_caesar, c_chianti, c_michael, c_greek_ch, c_ch,
          c_czerny, c_focaccia, c_double, c_hard_digraph, c_soft, c_default),
    "D": (d_dg, d_double, d_default),
    "F": (f_default,),
    "G": (g_gh, g_gn, g_tagliaro, g_initial_soft, g_ger_gy, g_italian,
          g_default),
    "H": (h_default,),
    "J": (j_spanish, j_default),
    "K": (k_default,),
    "L": (l_spanish, l_default),
    "M": (m_default,),
    "N": (n_default,),
    "Ñ": (n_tilde,),
    "P": (p_ph, p_default),
    "Q": (q_default,),
    "R": (r_default,),
    "S": (s_island, s_sugar, s_sh, s_italian, s_germanic, s_sc, s_default),
    "T": (t_tion, t_tia_tch, t_th, t_default),
    "V": (v_default,),
    "W": (w_wr, w_default),
    "X": (x_default,),
    "Z": (z_pinyin, z_default),
}


def apply_rules(w: PaddedWord, i: int, out: CodeBuffers) -> int:
    """Fire the first matching sub-rule at position i; return the advance.

    Characters with no rule class (digits, punctuation, blanks, other
    letters) emit nothing and advance by one.
    """
    for rule in RULES.get(w.at(i), ()):
        step = rule(w, i, out)
        if step is not None:
            return step
    return 1
