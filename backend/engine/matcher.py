from lexicon.materials import MaterialPreset, get_material


def find_material_match(tokens: list[str]) -> tuple[MaterialPreset | None, int]:
    """Pick the material whose keyword token is longest.

    Longer keywords are treated as more specific. On equal length the first
    token seen wins. Returns (preset, score) where score is the winning
    token's length, or (None, 0) when nothing matched.
    """
    best: MaterialPreset | None = None
    best_score = 0
    for token in tokens:
        preset = get_material(token)
        if preset is None:
            continue
        score = len(token)
        if score > best_score:
            best = preset
            best_score = score
    return best, best_score
