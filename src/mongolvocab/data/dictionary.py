"""Base dictionary compiled into the application (ids below 1000)."""
from mongolvocab.models.vocab_models import Word

DICTIONARY = [
    # Greetings
    Word(1, "Hello", "Сайн байна уу", "Sain baina uu", "greetings"),
    Word(2, "Good morning", "Өглөөний мэнд", "Öglöönii mend", "greetings"),
    Word(3, "Good evening", "Оройн мэнд", "Oroin mend", "greetings"),
    Word(4, "Goodbye", "Баяртай", "Bayartai", "greetings"),
    Word(5, "Thank you", "Баярлалаа", "Bayarlalaa", "greetings"),
    Word(6, "Please", "Гуйя", "Guiya", "greetings"),
    Word(7, "Yes", "Тийм", "Tiim", "greetings"),
    Word(8, "No", "Үгүй", "Ügüi", "greetings"),
    Word(9, "Excuse me", "Уучлаарай", "Uuchlaarai", "greetings"),
    Word(10, "How are you?", "Сайн байна уу?", "Sain baina uu?", "greetings"),

    # Numbers 1-10
    Word(11, "One", "Нэг", "Neg", "numbers"),
    Word(12, "Two", "Хоёр", "Khoyor", "numbers"),
    Word(13, "Three", "Гурав", "Gurav", "numbers"),
    Word(14, "Four", "Дөрөв", "Döröv", "numbers"),
    Word(15, "Five", "Тав", "Tav", "numbers"),
    Word(16, "Six", "Зургаа", "Zurgaa", "numbers"),
    Word(17, "Seven", "Долоо", "Doloo", "numbers"),
    Word(18, "Eight", "Найм", "Naim", "numbers"),
    Word(19, "Nine", "Ес", "Yes", "numbers"),
    Word(20, "Ten", "Арав", "Arav", "numbers"),

    # Family terms
    Word(21, "Mother", "Ээж", "Eej", "family"),
    Word(22, "Father", "Аав", "Aav", "family"),
    Word(23, "Sister", "Эгч", "Egch", "family"),
    Word(24, "Brother", "Ах", "Akh", "family"),
    Word(25, "Grandmother", "Эмээ", "Emee", "family"),
    Word(26, "Grandfather", "Өвөө", "Övöö", "family"),
    Word(27, "Child", "Хүүхэд", "Khüükhed", "family"),
    Word(28, "Son", "Хүү", "Khüü", "family"),
    Word(29, "Daughter", "Охин", "Okhin", "family"),
    Word(30, "Family", "Гэр бүл", "Ger bül", "family"),

    # Nature
    Word(31, "Sun", "Нар", "Nar", "nature"),
    Word(32, "Moon", "Сар", "Sar", "nature"),
    Word(33, "Star", "Од", "Od", "nature"),
    Word(34, "Sky", "Тэнгэр", "Tenger", "nature"),
    Word(35, "Mountain", "Уул", "Uul", "nature"),
    Word(36, "River", "Гол", "Gol", "nature"),
    Word(37, "Lake", "Нуур", "Nuur", "nature"),
    Word(38, "Tree", "Мод", "Mod", "nature"),
    Word(39, "Flower", "Цэцэг", "Tsetseg", "nature"),
    Word(40, "Grass", "Өвс", "Övs", "nature"),

    # Animals
    Word(41, "Horse", "Морь", "Mor'", "animals"),
    Word(42, "Sheep", "Хонь", "Khon'", "animals"),
    Word(43, "Goat", "Ямаа", "Yamaa", "animals"),
    Word(44, "Cow", "Үнээ", "Ünee", "animals"),
    Word(45, "Camel", "Тэмээ", "Temee", "animals"),
    Word(46, "Dog", "Нохой", "Nokhoi", "animals"),
    Word(47, "Cat", "Муур", "Muur", "animals"),
    Word(48, "Bird", "Шувуу", "Shuvuu", "animals"),
    Word(49, "Fish", "Загас", "Zagas", "animals"),
    Word(50, "Wolf", "Чоно", "Chono", "animals"),

    # Food
    Word(51, "Water", "Ус", "Us", "food"),
    Word(52, "Bread", "Талх", "Talkh", "food"),
    Word(53, "Meat", "Мах", "Makh", "food"),
    Word(54, "Milk", "Сүү", "Süü", "food"),
    Word(55, "Tea", "Цай", "Tsai", "food"),
    Word(56, "Salt", "Давс", "Davs", "food"),
    Word(57, "Sugar", "Чихэр", "Chikher", "food"),
    Word(58, "Butter", "Масло", "Maslo", "food"),
    Word(59, "Cheese", "Бяслаг", "Byaslag", "food"),
    Word(60, "Rice", "Будаа", "Budaa", "food"),

    # Colors
    Word(61, "White", "Цагаан", "Tsagaan", "colors"),
    Word(62, "Black", "Хар", "Khar", "colors"),
    Word(63, "Red", "Улаан", "Ulaan", "colors"),
    Word(64, "Blue", "Цэнхэр", "Tsenkher", "colors"),
    Word(65, "Green", "Ногоон", "Nogoon", "colors"),
    Word(66, "Yellow", "Шар", "Shar", "colors"),
    Word(67, "Gold", "Алтан", "Altan", "colors"),
    Word(68, "Silver", "Мөнгөн", "Möngön", "colors"),
    Word(69, "Brown", "Бор", "Bor", "colors"),
    Word(70, "Orange", "Улбар шар", "Ulbar shar", "colors"),

    # Body parts
    Word(71, "Head", "Толгой", "Tolgoi", "body"),
    Word(72, "Eye", "Нүд", "Nüd", "body"),
    Word(73, "Ear", "Чих", "Chikh", "body"),
    Word(74, "Nose", "Хамар", "Khamar", "body"),
    Word(75, "Mouth", "Ам", "Am", "body"),
    Word(76, "Hand", "Гар", "Gar", "body"),
    Word(77, "Foot", "Хөл", "Khöl", "body"),
    Word(78, "Heart", "Зүрх", "Zürkh", "body"),
    Word(79, "Tooth", "Шүд", "Shüd", "body"),
    Word(80, "Hair", "Үс", "Üs", "body"),

    # Common verbs
    Word(81, "To go", "Явах", "Yavakh", "verbs"),
    Word(82, "To come", "Ирэх", "Irekh", "verbs"),
    Word(83, "To eat", "Идэх", "Idekh", "verbs"),
    Word(84, "To drink", "Уух", "Uukh", "verbs"),
    Word(85, "To sleep", "Унтах", "Untakh", "verbs"),
    Word(86, "To see", "Харах", "Kharakh", "verbs"),
    Word(87, "To speak", "Ярих", "Yarikh", "verbs"),
    Word(88, "To listen", "Сонсох", "Sonsokh", "verbs"),
    Word(89, "To read", "Унших", "Unshikh", "verbs"),
    Word(90, "To write", "Бичих", "Bichikh", "verbs"),

    # Places
    Word(91, "House", "Байшин", "Baishin", "places"),
    Word(92, "Yurt", "Гэр", "Ger", "places"),
    Word(93, "City", "Хот", "Khot", "places"),
    Word(94, "Village", "Тосгон", "Tosgon", "places"),
    Word(95, "School", "Сургууль", "Surguul'", "places"),
    Word(96, "Hospital", "Эмнэлэг", "Emneleg", "places"),
    Word(97, "Market", "Зах", "Zakh", "places"),
    Word(98, "Road", "Зам", "Zam", "places"),
    Word(99, "Country", "Улс", "Uls", "places"),
    Word(100, "Mongolia", "Монгол", "Mongol", "places"),

    # Time expressions
    Word(101, "Today", "Өнөөдөр", "Önöödör", "time"),
    Word(102, "Tomorrow", "Маргааш", "Margaash", "time"),
    Word(103, "Yesterday", "Өчигдөр", "Öchigdör", "time"),
    Word(104, "Morning", "Өглөө", "Öglöö", "time"),
    Word(105, "Evening", "Орой", "Oroi", "time"),
    Word(106, "Night", "Шөнө", "Shönö", "time"),
    Word(107, "Day", "Өдөр", "Ödör", "time"),
    Word(108, "Week", "Долоо хоног", "Doloo khonog", "time"),
    Word(109, "Month", "Сар", "Sar", "time"),
    Word(110, "Year", "Жил", "Jil", "time"),

    # Adjectives
    Word(111, "Big", "Том", "Tom", "adjectives"),
    Word(112, "Small", "Жижиг", "Jijig", "adjectives"),
    Word(113, "Good", "Сайн", "Sain", "adjectives"),
    Word(114, "Bad", "Муу", "Muu", "adjectives"),
    Word(115, "Beautiful", "Гоё", "Goyo", "adjectives"),
    Word(116, "Hot", "Халуун", "Khaluun", "adjectives"),
    Word(117, "Cold", "Хүйтэн", "Khüiten", "adjectives"),
    Word(118, "New", "Шинэ", "Shine", "adjectives"),
    Word(119, "Old", "Хуучин", "Khuuchin", "adjectives"),
    Word(120, "Fast", "Хурдан", "Khurdan", "adjectives"),

    # Additional words
    Word(121, "Love", "Хайр", "Khair", "feelings"),
    Word(122, "Friend", "Найз", "Naiz", "people"),
    Word(123, "Person", "Хүн", "Khün", "people"),
    Word(124, "Man", "Эрэгтэй", "Eregtei", "people"),
    Word(125, "Woman", "Эмэгтэй", "Emegtei", "people"),
    Word(126, "Name", "Нэр", "Ner", "basic"),
    Word(127, "Book", "Ном", "Nom", "objects"),
    Word(128, "Money", "Мөнгө", "Möngö", "objects"),
    Word(129, "Work", "Ажил", "Ajil", "basic"),
    Word(130, "Life", "Амьдрал", "Amidral", "basic"),

    # Weather
    Word(131, "Rain", "Бороо", "Boroo", "weather"),
    Word(132, "Snow", "Цас", "Tsas", "weather"),
    Word(133, "Wind", "Салхи", "Salkhi", "weather"),
    Word(134, "Cloud", "Үүл", "Üül", "weather"),
    Word(135, "Weather", "Цаг агаар", "Tsag agaar", "weather"),

    # More verbs
    Word(136, "To love", "Хайрлах", "Khairlakh", "verbs"),
    Word(137, "To know", "Мэдэх", "Medekh", "verbs"),
    Word(138, "To want", "Хүсэх", "Khüsekh", "verbs"),
    Word(139, "To give", "Өгөх", "Ögökh", "verbs"),
    Word(140, "To take", "Авах", "Avakh", "verbs"),

    # Directions
    Word(141, "North", "Хойд", "Khoid", "directions"),
    Word(142, "South", "Өмнөд", "Ömnöd", "directions"),
    Word(143, "East", "Дорнод", "Dornod", "directions"),
    Word(144, "West", "Баруун", "Baruun", "directions"),
    Word(145, "Left", "Зүүн", "Züün", "directions"),
    Word(146, "Right", "Баруун", "Baruun", "directions"),

    # Question words
    Word(147, "What", "Юу", "Yuu", "questions"),
    Word(148, "Who", "Хэн", "Khen", "questions"),
    Word(149, "Where", "Хаана", "Khaana", "questions"),
    Word(150, "When", "Хэзээ", "Khezee", "questions"),
]

DICTIONARY_IDS = frozenset(word.id for word in DICTIONARY)
