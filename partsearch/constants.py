from __future__ import annotations

"""Static vocabularies used by the parts search engine.

The synonym table maps a canonical concept key to its surface forms:
spelling variants, loanwords, Tunisian/Maghreb shop-floor terms and common
misspellings. Forms are kept as written by the parts desk (accents and
multi-word phrases included); matching happens against normalised text.
"""

from typing import Dict, Tuple

SYNONYMS: Dict[str, Tuple[str, ...]] = {
    # Vitrerie & ouvrants
    "vitre": ("vitre", "vitres", "glace", "glaces", "verre", "fenetre", "fenêtre", "fenêtres",
              "window", "custode", "lunette", "vit"),
    "levevitre": ("leve vitre", "lève vitre", "leve-vitre", "lève-vitre", "lèvevitre", "levevitre",
                  "mecanisme vitre", "mécanisme vitre", "commande vitre"),
    "porte": ("porte", "portière", "portieres", "door", "portier", "bab"),
    "parebrise": ("parebrise", "pare-brise", "pare brise", "windshield", "parabrize", "brise",
                  "vitre avant"),
    "retroviseur": ("retroviseur", "rétroviseur", "miroir", "mirroir", "retro", "rétro", "mirwar"),
    "lunette": ("lunette", "vitre arriere", "vitre arrière", "glace arriere", "glace arrière"),

    # Suspension & direction
    "amortisseur": ("amortisseur", "amorto", "amort", "suspension", "amor", "amortisseure",
                    "amortiseur"),
    "biellette": ("biellette", "biellette de direction", "tirant", "bielette", "bielle direction",
                  "biel"),
    "rotule": ("rotule", "rotule de direction", "rot", "rotul", "boule direction"),
    "triangle": ("triangle", "bras", "bras de suspension", "triangl"),
    "cremaillere": ("cremaillere", "crémaillère", "direction", "steering", "crem"),
    "cardans": ("cardan", "transmission", "arbre de transmission", "drive shaft", "trans"),
    "roulement": ("roulement", "bearing", "roul", "rulman", "roulman"),
    "suspension": ("suspension", "susp", "ressort", "spring"),

    # Freinage
    "disque": ("disque", "disques", "disc", "disk", "disq", "frein avant"),
    "plaquette": ("plaquette", "plaquettes", "plaq", "pad", "pads", "plak", "plaket"),
    "etrier": ("etrier", "étrier", "etr", "caliper", "etrie", "etri"),
    "tambour": ("tambour", "tambours", "tam", "frein arriere", "frein arrière"),
    "frein": ("frein", "freinage", "brake", "frain", "break"),
    "maitre_cylindre": ("maitre cylindre", "maître cylindre", "master cylinder", "cylindre", "mcyl"),

    # Optiques
    "phare": ("phare", "phares", "optique", "projecteur", "headlight", "light", "dhou", "lumiere",
              "lumière"),
    "feu": ("feu", "feux", "clignotant", "antibrouillard", "feux stop", "stop", "cligno",
            "feu position", "warning"),
    "ampoule": ("ampoule", "lampe", "bulb", "led", "eclairage", "éclairage"),
    "optique": ("optique", "bloc optique", "bloc phare", "lighthouse"),

    # Electricite
    "batterie": ("batterie", "battery", "batri", "bateri", "accumulator", "accu"),
    "alternateur": ("alternateur", "alternator", "alter", "alterno", "alternato"),
    "demarreur": ("demarreur", "démarreur", "starter", "start", "demar", "démar"),
    "capteur": ("capteur", "sensor", "sonde", "detecteur", "détecteur", "capt"),
    "faisceau": ("faisceau", "câblage", "cablage", "fil", "fils", "wiring", "cable"),
    "boitier": ("boitier", "boîtier", "calculateur", "ecu", "module", "control unit"),
    "klaxon": ("klaxon", "avertisseur", "horn", "buzzer", "beeper"),

    # Filtration
    "filtreair": ("filtre air", "filtre à air", "filtre-a-air", "air filter", "filtr air",
                  "filtre admission"),
    "filtrehuile": ("filtre huile", "filtre à huile", "filtre-a-huile", "oil filter", "filtr huile",
                    "filtre lubrification"),
    "filtrefuel": ("filtre carburant", "filtre gasoil", "filtre essence", "filtre à carburant",
                   "fuel filter", "filtre combustible", "filtr essence"),
    "filtrehabitable": ("filtre habitacle", "filtre pollen", "filtre cabine", "cabin filter",
                        "filtre climatisation", "filtre interieur", "filtr habitacle"),
    "filtre": ("filtre", "filter", "filtr", "filtration", "cartouche"),

    # Moteur & transmission
    "courroie": ("courroie", "courroies", "belt", "courroi", "distribution", "timing belt",
                 "accessoires"),
    "pompeeau": ("pompe a eau", "pompe à eau", "water pump", "pompe eau", "pump water",
                 "pompe refroidissement"),
    "pompehuile": ("pompe a huile", "pompe à huile", "oil pump", "pompe huile", "lubrification"),
    "bougie": ("bougie", "bougies", "spark plug", "bougi", "sparkplug", "allumage"),
    "embrayage": ("embrayage", "kit embrayage", "clutch", "emb", "embrayag", "embreyage",
                  "debrayage"),
    "volantmoteur": ("volant moteur", "volant bimasse", "flywheel", "volant", "bimasse"),
    "butee": ("butee", "butée", "butée embrayage", "release bearing"),
    "moteur": ("moteur", "engine", "bloc moteur", "culasse", "cylindre", "motor"),
    "soupape": ("soupape", "valve", "admission", "echappement", "échappement", "valv"),
    "joint": ("joint", "gasket", "seal", "etancheite", "étanchéité", "join"),
    "piston": ("piston", "segment", "ring", "cylindre", "chemise"),
    "bielle": ("bielle", "rod", "connecting rod", "biel"),
    "vilebrequin": ("vilebrequin", "crankshaft", "manivelle", "crank"),

    # Refroidissement
    "radiateur": ("radiateur", "radiateur chauffage", "radiateur refroidissement",
                  "refroidissement", "chauffage"),
    "thermostat": ("thermostat",),
    "ventilateur": ("ventilateur", "ventilateur moteur"),

    # Carburant & alimentation
    "pompecarburant": ("pompe carburant", "pompe essence", "fuel pump", "pompe", "pompe à essence",
                       "pompe injection", "jauge"),
    "injecteur": ("injecteur", "injecteurs", "injection", "inject", "gicleur", "buse injection",
                  "injector"),
    "reservoir": ("reservoir", "réservoir", "tank", "reserv", "tank essence", "tank carburant",
                  "fuel tank"),
    "bouchonreservoir": ("bouchon reservoir", "bouchon réservoir", "fuel cap", "bouchon essence",
                         "cap", "tappo"),
    "carburateur": ("carburateur", "carbu", "carburetor", "mixing", "melangeur"),
    "admission": ("admission", "intake", "collecteur admission", "pipe admission", "manifold"),
    "papillon": ("papillon", "throttle", "throttle body", "boitier papillon", "corps papillon"),

    # Echappement
    "echappement": ("echappement", "tuyau echappement", "silencieux", "exhaust", "pot",
                    "systeme echappement", "sortie", "tuyau"),
    "catalyseur": ("catalyseur", "catalytic", "cat", "convertisseur catalytique", "depollution"),
    "marmite": ("marmite echappement", "marmite", "silencieux arriere", "pot arriere",
                "rear silencer"),
    "ligne": ("ligne echappement", "ligne complete", "full system", "systeme complet"),

    # Climatisation
    "compresseur": ("compresseur", "compresseur clim", "ac compressor", "comp clim", "compresso"),
    "condenseur": ("condenseur", "radiateur clim", "ac radiator", "cooling radiator"),
    "evaporateur": ("evaporateur", "évaporateur", "cooling unit", "unite refroidissement"),
    "filtreclim": ("filtre clim", "filtre climatisation", "deshydrateur", "secheur"),

    # Autres pieces courantes
    "courroiedistribution": ("courroie distribution", "courroie dentée", "timing belt",
                             "distribution kit"),
    "chaine": ("chaine", "chaîne", "chain", "distribution chain"),
    "cable": ("cable", "câble", "wire", "fil", "commande", "control cable"),
    "durite": ("durite", "durites", "tuyau", "tube", "pipe", "hose", "flexible"),
    "collier": ("collier", "attache", "fixation", "support", "clamp", "bracket"),
    "vis": ("vis", "boulon", "ecrou", "bolt", "nut", "screw", "fixation"),
    "clip": ("clip", "agrafe", "attache", "fastener", "rivet", "fixation rapide"),

    # Positions
    "avant": ("avant", "av"),
    "arriere": ("arriere", "arrière", "ar"),
    "gauche": ("gauche", "g", "conducteur"),
    "droite": ("droite", "d", "passager"),
    "superieur": ("superieur", "supérieur"),
    "inferieur": ("inferieur", "inférieur"),
    "interieur": ("interieur", "intérieur"),
    "exterieur": ("exterieur", "extérieur"),
}

# Boost for frequently requested part families. Keys are matched as raw
# query tokens and as substrings of normalised designations.
TYPE_WEIGHTS: Dict[str, float] = {
    "filtre": 1.2,
    "huile": 1.2,
    "frein": 1.3,
    "plaquette": 1.3,
    "amortisseur": 1.5,
    "courroie": 1.25,
    "batterie": 1.2,
    "phare": 1.15,
    "lampe": 1.15,
    "joint": 1.1,
    "moteur": 1.1,
}

# Tokens that make a query positionally specific (drives result count).
SPECIFICITY_TOKENS: Tuple[str, ...] = (
    "avant", "arriere", "arrière", "av", "ar",
    "gauche", "droite", "g", "d", "conducteur", "passager",
    "superieur", "inferieur", "interieur", "exterieur",
)

# Thanks / courtesy openers that need no catalog lookup.
SMALL_TALK_TERMS: Tuple[str, ...] = (
    "merci",
    "thank you",
    "thx",
    "shukran",
    "yaatik issaha",
    "bravo",
    "sa7a",
)
