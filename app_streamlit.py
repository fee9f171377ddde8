import os

import pandas as pd
import requests
import streamlit as st

API_URL = os.environ.get("API_URL", "http://127.0.0.1:5000").rstrip("/")

st.set_page_config(page_title="Symptom Triage", page_icon="🏥", layout="centered")

st.title("🏥 Symptom Triage — AI Guidance")
st.info("This tool offers general guidance only. It is not a medical diagnosis.")


@st.cache_data(ttl=300)
def fetch_symptoms():
    resp = requests.get(f"{API_URL}/api/symptoms", timeout=10)
    resp.raise_for_status()
    return resp.json()


try:
    symptoms = fetch_symptoms()
except requests.RequestException as e:
    st.error(f"Could not load symptoms from the API: {e}")
    symptoms = []

names_by_id = {s["id"]: s["name"] for s in symptoms}
selected = st.multiselect("Select your symptoms:", options=list(names_by_id), format_func=names_by_id.get)
chat = st.text_area("...or describe them in your own words:", placeholder="e.g. runny nose and sneezing for two days")

if st.button("Get Guidance"):
    if not chat.strip() and not selected:
        st.warning("Please select symptoms or describe them first.")
    else:
        with st.spinner("Calling backend API..."):
            resp = requests.post(
                f"{API_URL}/api/diagnose",
                json={"selectedSymptomIds": selected, "chatInput": chat},
                timeout=120,
            )
        data = resp.json()
        if resp.status_code != 200:
            st.error(data.get("error", "Request failed."))
            if data.get("details"):
                with st.expander("Details"):
                    st.write(data["details"])
        else:
            st.subheader("🔎 AI Guidance")
            st.markdown(data["aiResponse"])
            structured = data["structuredData"]
            if structured["recommendations"]:
                st.subheader("🩺 Recommendations")
                st.dataframe(pd.DataFrame(structured["recommendations"]))
            st.subheader("📍 Where to get care")
            st.dataframe(pd.DataFrame(structured["resources"]))
            st.caption(data["message"])
