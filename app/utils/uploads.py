import logging
import os
import time
from typing import List

from decouple import config
from fastapi import UploadFile

logger = logging.getLogger(__name__)

UPLOAD_DIR = config("UPLOAD_DIR", default="homework")


class UploadSink:
    """Сохраняет загруженные файлы на диск под именем <timestamp><расширение>"""

    def __init__(self, directory: str):
        self.directory = directory

    def init(self):
        # вызывается один раз при старте приложения
        os.makedirs(self.directory, exist_ok=True)
        logger.info("📁 Upload directory: %s", os.path.abspath(self.directory))

    def _write_new(self, ext: str, content: bytes) -> str:
        # "xb" занимает имя атомарно, занятое имя даёт FileExistsError
        stamp = int(time.time() * 1000)
        while True:
            name = f"{stamp}{ext}"
            try:
                with open(os.path.join(self.directory, name), "xb") as f:
                    f.write(content)
                return name
            except FileExistsError:
                stamp += 1

    async def save(self, files: List[UploadFile] | None) -> List[str]:
        names = []
        for file in files or []:
            if not file or not file.filename:
                continue
            ext = os.path.splitext(file.filename)[1]
            # между выбором имени и записью не должно быть await
            content = await file.read()
            names.append(self._write_new(ext, content))

        if names:
            logger.info("Сохранено файлов: %d (%s)", len(names), ", ".join(names))
        return names


upload_sink = UploadSink(UPLOAD_DIR)


def get_upload_sink() -> UploadSink:
    return upload_sink
