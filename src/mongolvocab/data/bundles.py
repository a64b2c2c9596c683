"""One-time word bundles offered to the user."""
from typing import List

from mongolvocab.models.vocab_models import Word, WordBundle

BUNDLE_2026_02_ANIMALS = WordBundle(
    bundle_id="2026-02-animals",
    title="Animals Pack",
    description="Common animal vocabulary with 15 essential words.",
    words=[
        Word(100001, "Dog", "Нохой", "Nokhoi", "animals"),
        Word(100002, "Cat", "Муур", "Muur", "animals"),
        Word(100003, "Horse", "Морь", "Mor'", "animals"),
        Word(100004, "Cow", "Үхэр", "Ükher", "animals"),
        Word(100005, "Sheep", "Хонь", "Khon'", "animals"),
        Word(100006, "Goat", "Ямаа", "Yamaa", "animals"),
        Word(100007, "Camel", "Тэмээ", "Temee", "animals"),
        Word(100008, "Bird", "Шувуу", "Shuvuu", "animals"),
        Word(100009, "Fish", "Загас", "Zagas", "animals"),
        Word(100010, "Wolf", "Чоно", "Chono", "animals"),
        Word(100011, "Eagle", "Бүргэд", "Bürged", "animals"),
        Word(100012, "Bear", "Баавгай", "Baavgai", "animals"),
        Word(100013, "Rabbit", "Туулай", "Tuulai", "animals"),
        Word(100014, "Deer", "Буга", "Buga", "animals"),
        Word(100015, "Snake", "Могой", "Mogoi", "animals"),
    ],
)

BUNDLES: List[WordBundle] = [BUNDLE_2026_02_ANIMALS]
