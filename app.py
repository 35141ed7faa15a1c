"""
LyricDrill - Language practice through song lyrics

Streamlit application for practicing a language with song lyrics.
Each lesson mixes fill-in-the-blank and word-arrangement exercises.

Usage:
    streamlit run app.py
"""

import streamlit as st

from lyricdrill.classroom import LessonService, LessonStore, SongLibrary
from lyricdrill.config import configure_logging, load_settings
from lyricdrill.errors import ConflictError, LyricDrillError
from lyricdrill.schemas import ItemType
from lyricdrill.utils import lyrics_to_lines
from lyricdrill.viewer import (
    get_quiz_css,
    is_arrangement_correct,
    recorded_results,
    render_fill_blank,
    render_summary,
    shuffle_for_display,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="LyricDrill",
    page_icon="🎵",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        settings = load_settings()
        configure_logging(settings.log_level)
        st.session_state.settings = settings

    settings = st.session_state.settings

    if "library" not in st.session_state:
        st.session_state.library = SongLibrary(settings.db_path, timeout=settings.db_timeout)

    if "store" not in st.session_state:
        st.session_state.store = LessonStore(settings.db_path, timeout=settings.db_timeout)

    if "service" not in st.session_state:
        st.session_state.service = LessonService(st.session_state.library, st.session_state.store)

    if "user_id" not in st.session_state:
        st.session_state.user_id = ""

    if "lesson" not in st.session_state:
        st.session_state.lesson = None

    if "results" not in st.session_state:
        st.session_state.results = {}   # item index -> correct

    if "shuffled" not in st.session_state:
        st.session_state.shuffled = {}  # item index -> display order for arrange items


def reset_lesson_state(lesson=None):
    """Switch to a new (or no) lesson."""
    st.session_state.lesson = lesson
    st.session_state.results = {}
    st.session_state.shuffled = {}


# -----------------------------------------------------------------------------
# Sidebar: Learner and Song Library
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with learner ID and song library."""
    st.sidebar.title("🎵 LyricDrill")

    st.session_state.user_id = st.sidebar.text_input(
        "Your name or ID",
        value=st.session_state.user_id,
    )

    library = st.session_state.library
    try:
        st.sidebar.markdown(f"**Songs in library:** {library.get_song_count()}")
    except LyricDrillError as e:
        st.sidebar.error(f"Could not read song library: {e}")

    st.sidebar.divider()
    st.sidebar.subheader("Add a song")
    with st.sidebar.form("add_song", clear_on_submit=True):
        title = st.text_input("Title")
        artist = st.text_input("Artist")
        lyrics = st.text_area("Lyrics (one line per row)", height=200)
        if st.form_submit_button("Add song"):
            if not title.strip() or not lyrics.strip():
                st.error("Title and lyrics are required.")
            else:
                try:
                    song = library.add_song(title.strip(), artist.strip(), lyrics_to_lines(lyrics))
                    st.success(f"Added '{song.title}' ({song.line_count} lines)")
                except LyricDrillError as e:
                    st.error(f"Could not add song: {e}")

    render_lesson_history()


def render_lesson_history():
    """List the learner's earlier lessons."""
    user_id = st.session_state.user_id.strip()
    if not user_id:
        return

    try:
        lessons = st.session_state.store.list_lessons_for_user(user_id)
    except LyricDrillError as e:
        st.sidebar.error(f"Could not load your lessons: {e}")
        return
    if not lessons:
        return

    st.sidebar.divider()
    st.sidebar.subheader("Your lessons")
    for lesson in lessons[:10]:
        label = f"{lesson.created_at:%Y-%m-%d %H:%M} ({len(lesson.answers)} answered)"
        if st.sidebar.button(label, key=f"resume_{lesson.id}"):
            resume_lesson(lesson)


def resume_lesson(lesson):
    """Load a stored lesson into the main view with its recorded answers."""
    try:
        reset_lesson_state(st.session_state.service.resume_lesson(lesson.id))
    except LyricDrillError as e:
        st.sidebar.error(f"Could not resume lesson: {e}")
        return
    st.session_state.results = recorded_results(lesson)
    st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Lesson View
# -----------------------------------------------------------------------------

def render_lesson_view():
    """Render the current lesson or the start screen."""
    service = st.session_state.service

    if st.button("Start a new lesson", type="primary"):
        try:
            reset_lesson_state(service.create_lesson(st.session_state.user_id))
            st.rerun()
        except LyricDrillError as e:
            st.error(f"Could not create lesson: {e}")

    lesson = st.session_state.lesson
    if lesson is None:
        st.info("Enter your name in the sidebar and start a lesson.")
        return

    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    for index, item in enumerate(lesson.items):
        if item.type == ItemType.FILL_BLANK:
            render_fill_blank_item(lesson.lesson_id, index, item)
        else:
            render_arrange_item(lesson.lesson_id, index, item)

    render_summary_section(lesson.lesson_id)


def render_fill_blank_item(lesson_id: str, index: int, item):
    """Render a fill-in-the-blank exercise."""
    st.markdown(render_fill_blank(item, index), unsafe_allow_html=True)

    if index in st.session_state.results:
        show_result(index, item.correct_word)
        return

    choice = st.radio("Choose the missing word", item.words, key=f"fill_{lesson_id}_{index}")
    if st.button("Check", key=f"check_{lesson_id}_{index}"):
        submit(lesson_id, index, ItemType.FILL_BLANK, choice)


def render_arrange_item(lesson_id: str, index: int, item):
    """Render a word-arrangement exercise."""
    st.markdown(f"**Exercise {index + 1}: put the words in order**")

    shuffled = st.session_state.shuffled.setdefault(index, shuffle_for_display(item.words))
    st.markdown(" · ".join(f"`{word}`" for word in shuffled))

    if index in st.session_state.results:
        show_result(index, " ".join(item.words))
        return

    typed = st.text_input("Type the line", key=f"arrange_{lesson_id}_{index}")
    if st.button("Check", key=f"check_{lesson_id}_{index}"):
        if is_arrangement_correct(item.words, typed.split()):
            submit(lesson_id, index, ItemType.ARRANGE, typed)
        else:
            st.warning("Not quite, try again.")


def submit(lesson_id: str, index: int, answer_type: ItemType, user_input: str):
    """Send an answer to the service and remember the outcome."""
    try:
        result = st.session_state.service.submit_answer(lesson_id, index, answer_type, user_input)
        st.session_state.results[index] = result.correct
        st.rerun()
    except ConflictError:
        st.warning("You already answered this exercise.")
    except LyricDrillError as e:
        st.error(f"Could not submit answer: {e}")


def show_result(index: int, expected: str):
    if st.session_state.results[index]:
        st.success("Correct!")
    else:
        st.error(f"Not quite. The answer was: {expected}")


def render_summary_section(lesson_id: str):
    """Render the lesson score."""
    st.divider()
    if st.button("Show summary"):
        try:
            summary = st.session_state.service.get_summary(lesson_id)
        except LyricDrillError as e:
            st.error(f"Could not load summary: {e}")
            return
        st.markdown(render_summary(summary), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    render_lesson_view()


if __name__ == "__main__":
    main()
