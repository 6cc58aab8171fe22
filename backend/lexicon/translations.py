"""Russian -> canonical English token dictionary.

Covers material nouns and adjectives, color adjectives and texture
adjectives. Tokens without an entry pass through unchanged. A few
adjectives ("frozen", "glowing") translate to words no table knows, so they
match nothing.
"""

RUSSIAN_TO_ENGLISH: dict[str, str] = {
    # Materials
    "камень": "stone",
    "камня": "stone",
    "каменный": "stone",
    "каменная": "stone",
    "каменное": "stone",
    "скала": "rock",
    "дерево": "wood",
    "деревянный": "wood",
    "деревянная": "wood",
    "металл": "metal",
    "металлический": "metal",
    "металлическая": "metal",
    "стекло": "glass",
    "стеклянный": "glass",
    "стеклянная": "glass",
    "кристалл": "crystal",
    "кристаллический": "crystal",
    "лёд": "ice",
    "лед": "ice",
    "ледяной": "ice",
    "ледяная": "ice",
    "самоцвет": "gem",
    "трава": "grass",
    "травяной": "grass",
    "мох": "moss",
    "мхом": "moss",
    "мшистый": "moss",
    "песок": "sand",
    "песчаный": "sand",
    "песчаная": "sand",
    "кирпич": "brick",
    "кирпичный": "brick",
    "кирпичная": "brick",
    "бетон": "concrete",
    "бетонный": "concrete",
    "гранит": "granite",
    "гранитный": "granite",
    "мрамор": "marble",
    "мраморный": "marble",
    "золото": "gold",
    "золотой": "gold",
    "золотая": "gold",
    "медь": "copper",
    "медный": "copper",
    "медная": "copper",
    "железо": "iron",
    "железный": "iron",
    "железная": "iron",
    "сталь": "steel",
    "стальной": "steel",
    "стальная": "steel",
    "ржавый": "rust",
    "ржавая": "rust",
    "ржавчина": "rust",
    "вода": "water",
    "водяной": "water",
    "водяная": "water",
    "лава": "lava",
    "лавовый": "lava",
    "магия": "magic",
    "магический": "magic",
    "магическая": "magic",
    "дуб": "oak",
    "дубовый": "oak",
    "береза": "birch",
    "берёза": "birch",
    "березовый": "birch",
    "берёзовый": "birch",
    "кора": "bark",
    "грязь": "dirt",
    "земля": "dirt",
    "земляной": "dirt",
    "булыжник": "cobblestone",
    # Colors
    "темный": "dark",
    "тёмный": "dark",
    "темная": "dark",
    "тёмная": "dark",
    "светлый": "light",
    "светлая": "light",
    "яркий": "bright",
    "яркая": "bright",
    "бледный": "pale",
    "бледная": "pale",
    "красный": "red",
    "красная": "red",
    "синий": "blue",
    "синяя": "blue",
    "зеленый": "green",
    "зелёный": "green",
    "зеленая": "green",
    "зелёная": "green",
    "желтый": "yellow",
    "жёлтый": "yellow",
    "желтая": "yellow",
    "жёлтая": "yellow",
    "белый": "white",
    "белая": "white",
    "черный": "black",
    "чёрный": "black",
    "черная": "black",
    "чёрная": "black",
    "серый": "gray",
    "серая": "gray",
    "коричневый": "brown",
    "коричневая": "brown",
    "фиолетовый": "purple",
    "фиолетовая": "purple",
    "оранжевый": "orange",
    "оранжевая": "orange",
    "розовый": "pink",
    "розовая": "pink",
    "голубой": "cyan",
    "голубая": "cyan",
    # Textures
    "полированный": "polished",
    "полированная": "polished",
    "шероховатый": "rough",
    "шероховатая": "rough",
    "гладкий": "smooth",
    "гладкая": "smooth",
    "блестящий": "shiny",
    "блестящая": "shiny",
    "глянцевый": "glossy",
    "глянцевая": "glossy",
    "матовый": "matte",
    "матовая": "matte",
    "старый": "old",
    "старая": "old",
    "новый": "new",
    "новая": "new",
    "древний": "ancient",
    "древняя": "ancient",
    "мокрый": "wet",
    "мокрая": "wet",
    "сухой": "dry",
    "сухая": "dry",
    "пыльный": "dusty",
    "пыльная": "dusty",
    "выветренный": "weathered",
    "выветренная": "weathered",
    "замерзший": "frozen",
    "замёрзший": "frozen",
    "замерзшая": "frozen",
    "замороженный": "frozen",
    "замороженная": "frozen",
    "светящийся": "glowing",
    "светящаяся": "glowing",
    # Gradient words
    "вертикальный": "vertical",
    "горизонтальный": "horizontal",
    "радиальный": "radial",
    "верх": "top",
    "низ": "bottom",
    "центр": "center",
    "край": "edge",
    "слоистый": "layered",
}


def translate_token(token: str) -> str:
    return RUSSIAN_TO_ENGLISH.get(token, token)
