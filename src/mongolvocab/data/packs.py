"""Versioned content packs and their manifest."""
from typing import Dict, List, Optional, Tuple

from mongolvocab.models.vocab_models import PackMeta, Word

ANIMALS_V1 = [
    Word(200001, "Dog", "Нохой", "Nokhoi", "animals"),
    Word(200002, "Cat", "Муур", "Muur", "animals"),
    Word(200003, "Horse", "Морь", "Mor'", "animals"),
    Word(200004, "Cow", "Үхэр", "Ükher", "animals"),
    Word(200005, "Sheep", "Хонь", "Khon'", "animals"),
    Word(200006, "Goat", "Ямаа", "Yamaa", "animals"),
    Word(200007, "Camel", "Тэмээ", "Temee", "animals"),
    Word(200008, "Bird", "Шувуу", "Shuvuu", "animals"),
    Word(200009, "Fish", "Загас", "Zagas", "animals"),
    Word(200010, "Wolf", "Чоно", "Chono", "animals"),
    Word(200011, "Eagle", "Бүргэд", "Bürged", "animals"),
    Word(200012, "Bear", "Баавгай", "Baavgai", "animals"),
    Word(200016, "Mouse", "Хулгана", "Khulgana", "animals"),
]

ANIMALS_V2 = [
    Word(200001, "Dog", "Нохой", "Nokhoi", "animals"),
    Word(200002, "Cat", "Муур", "Muur (meow!)", "animals"),
    Word(200003, "Horse", "Морь", "Mor'", "animals"),
    Word(200004, "Cow", "Үхэр", "Ükher", "animals"),
    Word(200005, "Sheep", "Хонь", "Khon'", "animals"),
    Word(200006, "Goat", "Ямаа", "Yamaa", "animals"),
    Word(200007, "Camel", "Тэмээ", "Temee", "animals"),
    Word(200008, "Bird", "Шувуу", "Shuvuu", "animals"),
    Word(200009, "Fish", "Загас", "Zagas", "animals"),
    Word(200010, "Wolf", "Чоно", "Chono", "animals"),
    Word(200011, "Eagle", "Бүргэд", "Bürged", "animals"),
    Word(200012, "Bear", "Баавгай", "Baavgai", "animals"),
    Word(200013, "Rabbit", "Туулай", "Tuulai", "animals"),
    Word(200014, "Deer", "Буга", "Buga", "animals"),
    Word(200015, "Snake", "Могой", "Mogoi", "animals"),
]

MISSIONARY_STARTER_V1 = [
    Word(300001, "Baptism", "Баптисм", "Baptism", "missionary"),
    Word(300002, "Bible", "Библи", "Bibli", "missionary"),
    Word(300003, "Book of Mormon", "Мормоны ном", "Mormonii nom", "missionary"),
    Word(300004, "Charity", "Энэрэл", "Enerel", "missionary"),
    Word(300005, "Church Member", "Сүмийн гишүүн", "Sümiin gishüün", "missionary"),
    Word(300006, "Companion", "Хамтрагч", "Khamtrach", "missionary"),
    Word(300007, "Faith", "Итгэл", "Itgel", "missionary"),
    Word(300008, "God", "Бурхан", "Burkhan", "missionary"),
    Word(300009, "Heavenly Father", "Тэнгэрлэг Эцэг", "Tengerleg Etseg", "missionary"),
    Word(300010, "Holy Ghost", "Ариун Сүнс", "Ariun Süns", "missionary"),
    Word(300011, "Hope", "Найдвар", "Naidvar", "missionary"),
    Word(300012, "Jesus Christ", "Есүс Христ", "Yesüs Khrist", "missionary"),
    Word(300013, "Lesson", "Хичээл", "Khicheel", "missionary"),
    Word(300014, "Mission President", "Номлолын Ерөнхийлөгч", "Nomloliin Yerönkhiilögch", "missionary"),
    Word(300015, "Missionary", "Номлогч", "Nomlogch", "missionary"),
    Word(300016, "Plan of Salvation", "Авралын Төлөвлөгөө", "Avraliin Tölövlögöö", "missionary"),
    Word(300017, "Repentance", "Наманчлал", "Namanchlal", "missionary"),
    Word(300018, "Stake", "Гадас", "Gadas", "missionary"),
    Word(300019, "Tree of Life", "Амьдралын Мод", "Amidraliyn Mod", "missionary"),
    Word(300020, "Ward", "Тойрог", "Toirog", "missionary"),
]

PACK_WORDS: Dict[Tuple[str, int], List[Word]] = {
    ("animals", 1): ANIMALS_V1,
    ("animals", 2): ANIMALS_V2,
    ("missionary_starter", 1): MISSIONARY_STARTER_V1,
}

# Current release of every pack.
PACKS: List[PackMeta] = [
    PackMeta(
        id="animals",
        version=2,
        title="Animals Pack",
        description="Common animal vocabulary with 15 essential words.",
        word_count=len(ANIMALS_V2),
    ),
    PackMeta(
        id="missionary_starter",
        version=1,
        title="Missionary Starter",
        description="Essential vocabulary for missionaries learning Mongolian.",
        word_count=len(MISSIONARY_STARTER_V1),
    ),
]


def get_pack_meta(pack_id: str) -> Optional[PackMeta]:
    """Get the manifest entry of a pack."""
    for pack in PACKS:
        if pack.id == pack_id:
            return pack
    return None


def get_pack_words(pack_id: str, version: int) -> List[Word]:
    """Get the words of a pack release, or an empty list if unknown."""
    return list(PACK_WORDS.get((pack_id, version), []))
