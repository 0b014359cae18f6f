class Translator:
    def __init__(self, language: str = "en") -> None:
        self.language = language
        self.translations = {
            "en": {},
            "ru": {
                "{type} training": "{type} тренировка",
                "Planned": "Запланировано",
                "In progress": "В процессе",
                "Done": "Выполнено",
                "Skipped": "Пропущено",
                "Run": "Бег",
                "Bike": "Велосипед",
                "Swim": "Плавание",
                "Yoga": "Йога",
                "Strength": "Силовая",
            },
        }

    def set_language(self, lang: str) -> None:
        self.language = lang

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

    def default_title(self, activity: str) -> str:
        return self.gettext("{type} training").format(type=activity)

    def status_label(self, status: str) -> str:
        labels = {
            "planned": "Planned",
            "in_progress": "In progress",
            "done": "Done",
            "skipped": "Skipped",
        }
        return self.gettext(labels.get(status, status))

    def activity_label(self, activity: str) -> str:
        return self.gettext(activity.capitalize())


translator = Translator()
