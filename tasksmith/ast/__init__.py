"""Data model for Taskfiles, their decoding from YAML and the include graph."""