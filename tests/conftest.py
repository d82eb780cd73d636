from __future__ import annotations

import pytest

from mpt_parser.config import Settings
from mpt_parser.navigator import load_document

SCHEDULE_HTML = """
<html><body>
<h2>Сейчас: <span class="label label-info">Знаменатель</span></h2>
<div class="tab-content">
  <div role="tabpanel" class="tab-pane active" id="spec-1">
    <h2>Расписание занятий для 09.02.07 Информационные системы и программирование</h2>
    <div class="tab-content">
      <div role="tabpanel" class="tab-pane active" id="group-1">
        <h3>Группа П50-1-21, П5О-2-21</h3>
        <table class="table">
          <caption>ПОНЕДЕЛЬНИК (Нахимовский)</caption>
          <tr><th>ПАРА</th><th>ПРЕДМЕТ</th><th>ПРЕПОДАВАТЕЛЬ</th></tr>
          <tr><td>0</td><td>Классный час</td><td>Иванов И.И.</td></tr>
          <tr><td>1</td><td>Математика</td><td>Иванов И.И.</td></tr>
          <tr>
            <td>2</td>
            <td><div class="label label-danger">Физика</div><br><div class="label label-info">Химия</div></td>
            <td><div class="label label-danger">Петров П.П.</div><br><div class="label label-info">Сидоров С.С.</div></td>
          </tr>
          <tr><td>3</td><td></td><td></td></tr>
          <tr>
            <td>4</td>
            <td><div>Информатика</div><div>Физкультура</div></td>
            <td><div>Смирнов А.А.</div></td>
          </tr>
        </table>
        <table class="table">
          <caption>Вторник ()</caption>
          <tr><th>ПАРА</th><th>ПРЕДМЕТ</th><th>ПРЕПОДАВАТЕЛЬ</th></tr>
          <tr><td>1</td><td>История</td><td>Смирнова А.А.</td></tr>
        </table>
        <table class="table">
          <caption>Выходной [Нежинская]</caption>
          <tr><th>ПАРА</th><th>ПРЕДМЕТ</th><th>ПРЕПОДАВАТЕЛЬ</th></tr>
        </table>
      </div>
      <div role="tabpanel" class="tab-pane" id="group-2">
        <h3>Группа %D0%98%D0%A1-1-21</h3>
        <table class="table">
          <caption>Суббота (Нежинская)</caption>
          <tr><th>ПАРА</th><th>ПРЕДМЕТ</th><th>ПРЕПОДАВАТЕЛЬ</th></tr>
          <tr><td>2</td><td>Экономика</td><td>Кузнецова Е.В.</td></tr>
        </table>
      </div>
    </div>
  </div>
  <div role="tabpanel" class="tab-pane" id="spec-2">
    <h2>Расписание занятий для 10.02.05 Обеспечение информационной безопасности</h2>
    <div class="tab-content">
      <div role="tabpanel" class="tab-pane active" id="group-3">
        <h3>Группа БИ50-1-22</h3>
        <table class="table">
          <caption>Среда (Нахимовский)</caption>
          <tr><th>ПАРА</th><th>ПРЕДМЕТ</th><th>ПРЕПОДАВАТЕЛЬ</th></tr>
          <tr><td>1</td><td>Криптография</td><td>Волков Д.С.</td></tr>
        </table>
      </div>
    </div>
  </div>
</div>
</body></html>
"""

REPLACEMENTS_HTML = """
<html><body>
<div class="container-fluid">
  <h1>Изменения в расписании</h1>
  <h4>Замены на <b>18.10.2021</b></h4>
  <div class="table-responsive">
    <table class="table">
      <caption><b>А-11, А-12</b></caption>
      <tr><th>Пара</th><th>Что заменяют</th><th>На что заменяют</th><th>Добавлена</th></tr>
      <tr><td>1</td><td>Математика Иванов И.И.</td><td>Физика Петров П.П.</td><td>16.10.2021 12:34:56</td></tr>
      <tr><td>3</td><td>История Смирнова А.А.</td><td>Самостоятельная работа</td><td>17.10.2021 08:00:00</td></tr>
    </table>
  </div>
  <div class="table-responsive">
    <table class="table">
      <caption><b>П50-1-21</b></caption>
      <tr><th>Пара</th><th>Что заменяют</th><th>На что заменяют</th><th>Добавлена</th></tr>
      <tr><td>2</td><td>Химия</td><td>Биология Сидоров С.С.</td><td></td></tr>
    </table>
  </div>
  <h4>Замены на <b>19.10.2021</b></h4>
  <div class="table-responsive">
    <table class="table">
      <caption><b>БИ5О-1-22</b></caption>
      <tr><th>Пара</th><th>Что заменяют</th><th>На что заменяют</th><th>Добавлена</th></tr>
      <tr><td>4</td><td>Сети Волков Д.С.</td><td>Криптография Волков Д.С.</td><td>18.10.2021 17:00:00</td></tr>
    </table>
  </div>
</div>
</body></html>
"""

DAY_REPLACEMENTS_HTML = """
<html><body>
<h2>Замены на 18.10.2021</h2>
<table>
  <caption>А-11, А-12</caption>
  <tr><th>Пара</th><th>Что заменяют</th><th>На что заменяют</th></tr>
  <tr><td>1</td><td>Математика Иванов И.И.</td><td>Физика Петров П.П.</td></tr>
</table>
<table>
  <caption>Б-21</caption>
  <tr><th>Пара</th><th>Что заменяют</th><th>На что заменяют</th></tr>
  <tr><td>4</td><td>Химия</td><td>Самостоятельная работа</td></tr>
  <tr><td>5</td><td>Биология Сидоров С.С.</td><td>Экология Сидоров С.С.</td></tr>
</table>
</body></html>
"""

SPECIALTIES_HTML = """
<html><body>
<div class="tab-content">
  <ul>
    <li><a href=" https://mpt.ru/sites-otdels/is/ ">09.02.07 Информационные системы и программирование</a></li>
    <li><a href="https://mpt.ru/sites-otdels/ks/">09.02.01 (Э) Компьютерные системы и комплексы</a></li>
    <li><a href="https://mpt.ru/sites-otdels/first/">Отделение первого курса</a></li>
    <li><a href="https://mpt.ru/sites-otdels/misc/">Прочее</a></li>
    <li>Без ссылки</li>
  </ul>
</div>
</body></html>
"""

SPECIALTY_SITE_HTML = """
<html><body>
<h2>Важная информация</h2>
<ul>
  <li><a href="/upload/important.pdf">Приказ о практике</a> <span class="date">01.09.2021</span></li>
  <li><a href="">Без ссылки</a> <span class="date">скоро</span></li>
</ul>
<h2>Новости</h2>
<ul>
  <li><a href="https://mpt.ru/news/1/">День открытых дверей</a><span class="date">15.10.2021</span></li>
</ul>
<h3>Вопросы к экзаменам</h3>
<ul>
  <li><a href="upload/exam.docx">Математика</a><span class="date">10.10.2021 14:20:00</span></li>
</ul>
<div id="groups-leaders">
  <ul class="nav nav-tabs"><li><a href="#g1">П50-1-21</a></li><li><a href="#g2">П50-2-21</a></li></ul>
  <div class="tab-content">
    <div class="tab-pane active" id="g1">
      <h3>П50-1-21</h3>
      <table>
        <tr><th>Фото</th><th>Роль</th><th>ФИО</th></tr>
        <tr><td><img src="/upload/starosta.jpg"></td><td>Староста</td><td>Иванов Иван</td></tr>
      </table>
      <table>
        <tr><td><img src="https://cdn.mpt.ru/deputy.jpg"></td><td>Заместитель старосты</td><td>Петров Петр</td></tr>
      </table>
    </div>
    <div class="tab-pane" id="g2">
      <h3>П50-2-21</h3>
      <table><tr><td></td><td></td><td></td></tr></table>
    </div>
  </div>
</div>
</body></html>
"""

TEACHERS_HTML = """
<html><body>
<div class="entry-content">
  <p><img src="/wp-content/uploads/ivanov.jpg" alt="Иванов Иван Иванович"></p>
  <p><img src="/wp-content/uploads/petrov.jpg" alt="photo"><br>Петров&nbsp;Петр Петрович</p>
  <div><p><img src="https://cdn.example.org/sidorova.jpg" alt=""></p>Преподаватель информатикиСидорова Анна Сергеевна</div>
  <section><p><img src="/wp-content/uploads/nobody.jpg" alt="Фото"></p></section>
  <p><a href="https://staff.example.org/ivanov/">Иванов Иван Иванович</a></p>
</div>
</body></html>
"""


class FakeFetcher:
    """Serves canned documents and records every request."""

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def fetch(self, key, params=None):
        self.calls.append((key, dict(params or {})))
        page = self.pages[key]
        if callable(page):
            page = page(params)
        return load_document(page)


@pytest.fixture
def settings():
    return Settings(host="https://mpt.ru", teachers_url="https://staff.example.org/teachers/")


@pytest.fixture
def schedule_doc():
    return load_document(SCHEDULE_HTML)


@pytest.fixture
def replacements_doc():
    return load_document(REPLACEMENTS_HTML)


@pytest.fixture
def day_replacements_doc():
    return load_document(DAY_REPLACEMENTS_HTML)


@pytest.fixture
def specialties_doc():
    return load_document(SPECIALTIES_HTML)


@pytest.fixture
def specialty_site_doc():
    return load_document(SPECIALTY_SITE_HTML)


@pytest.fixture
def teachers_doc():
    return load_document(TEACHERS_HTML)
