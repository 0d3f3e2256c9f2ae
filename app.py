"""
Balatro AI Inspector
Streamlit page for checking what the AI opponent would play from a hand.
"""

import random

import pandas as pd
import streamlit as st

from balatro_ai.engine.deck import Deck
from balatro_ai.engine.hand_detector import contained_hand_types
from balatro_ai.engine.scoring import score_breakdown
from balatro_ai.engine.strategy import AI_HAND_SIZE, MAX_SELECTION_SIZE, AIConfig, AIStrategy
from balatro_ai.presets import PRESETS

# Page config
st.set_page_config(
    page_title="Balatro AI Inspector",
    page_icon="🃏",
    layout="wide"
)

st.title("🃏 Balatro AI Inspector")
st.markdown("*Which cards would the AI opponent play?*")

ALL_CARDS = Deck.standard_52().cards
CARD_LABELS = {str(card): card for card in ALL_CARDS}

# Sidebar for settings
st.sidebar.header("Settings")

preset_options = list(PRESETS.keys())
selected_preset = st.sidebar.selectbox(
    "Player rules",
    options=preset_options,
    format_func=lambda x: PRESETS[x].name
)
preset = PRESETS[selected_preset]
st.sidebar.markdown(f"*{preset.description}*")
st.sidebar.caption("The AI always plays under the standard rules.")

max_select = st.sidebar.slider("Max cards played", min_value=1,
                               max_value=MAX_SELECTION_SIZE, value=MAX_SELECTION_SIZE)

if st.sidebar.button("🎲 Deal random hand", use_container_width=True):
    st.session_state["hand"] = [str(c) for c in random.sample(ALL_CARDS, AI_HAND_SIZE)]

labels = st.multiselect(
    "Hand",
    options=list(CARD_LABELS.keys()),
    max_selections=AI_HAND_SIZE,
    key="hand",
)
hand = [CARD_LABELS[label] for label in labels]

st.divider()

if not hand:
    st.info("Pick up to 8 cards or deal a random hand.")
else:
    contained = contained_hand_types(hand, config=preset.rules)
    detected = preset.detector().detect(hand)
    breakdown = score_breakdown(detected)

    strategy = AIStrategy(AIConfig(max_selection_size=max_select))
    result = strategy.select(hand)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("AI plays", result.hand_type.display_name)
    with col2:
        st.metric("Cards played", f"{result.count}/{len(hand)}")
    with col3:
        st.metric("Heuristic score", f"{result.score:,}")

    st.subheader("Selection")
    st.code("  ".join(f"[{c}]" if chosen else f" {c} "
                      for c, chosen in zip(hand, result.selected)))

    col1, col2 = st.columns(2)
    with col1:
        st.subheader(f"Contained hands ({preset.name})")
        for hand_type in contained.hand_types():
            st.markdown(f"- {hand_type.display_name}")
    with col2:
        st.subheader("Whole hand, player scoring")
        st.write(f"**{detected.hand_type.display_name}** (lvl {detected.level})")
        st.write(f"**Score:** {breakdown.final_score:,}")
        for detail in breakdown.details:
            st.caption(detail)

    with st.expander("All candidate plays"):
        options = strategy.evaluate_all_plays(hand)
        table = pd.DataFrame({
            'Cards': [" ".join(str(c) for c in opt.cards) for opt in options],
            'Hand': [opt.hand_type.display_name for opt in options],
            'Score': [opt.score for opt in options],
        })
        st.dataframe(table, use_container_width=True, hide_index=True)

# Footer
st.divider()
st.markdown("*Built with the Balatro AI engine*")
