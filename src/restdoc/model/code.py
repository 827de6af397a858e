"""Read-only code model consumed by the endpoint collectors.

Mirrors what a source front-end knows about the declarations: classes,
their methods and parameters, annotations, doc comments and superclass
links. Instances are usually built by restdoc.model.loader.
"""

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from restdoc.model.javadoc import first_sentence, parse_javadoc


class Annotation(BaseModel):
    """An annotation use, keyed by its fully-qualified name."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: dict[str, list[str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _from_name(cls, data):
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("values", mode="before")
    @classmethod
    def _coerce_values(cls, v):
        if not v:
            return {}
        coerced = {}
        for key, value in v.items():
            if value is None:
                coerced[key] = []
            elif isinstance(value, (list, tuple)):
                coerced[key] = [str(item) for item in value]
            else:
                coerced[key] = [str(value)]
        return coerced

    def value(self, key: str) -> list[str]:
        """Return the element values for key, empty if the element is absent."""
        return list(self.values.get(key, []))

    def first(self, *keys: str) -> str | None:
        """Return the first value of the first present key among aliases."""
        for key in keys:
            values = self.values.get(key)
            if values:
                return values[0]
        return None


class DocTag(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    text: str = ""


class DocComment(BaseModel):
    """A parsed documentation comment."""

    model_config = ConfigDict(frozen=True)

    body: str = ""
    first_sentence: str | None = None
    tags: list[DocTag] = []
    params: dict[str, str] = {}

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data):
        if data is None:
            return {}
        if isinstance(data, str):
            return parse_javadoc(data)
        return data

    @field_validator("tags", mode="before")
    @classmethod
    def _expand_tag_mapping(cls, v):
        # {"pathVar": ["id The id"], "name": "Users"} is accepted as a shorthand
        if isinstance(v, dict):
            tags = []
            for name, texts in v.items():
                if texts is None:
                    texts = [""]
                elif not isinstance(texts, (list, tuple)):
                    texts = [texts]
                tags.extend({"name": name, "text": "" if text is None else str(text)} for text in texts)
            return tags
        return v or []

    @property
    def summary(self) -> str:
        if self.first_sentence is not None:
            return self.first_sentence
        return first_sentence(self.body)

    def tag_values(self, name: str) -> list[str]:
        """Return the texts of all block tags with the given name, in order."""
        return [tag.text for tag in self.tags if tag.name == name]

    def param_text(self, name: str) -> str | None:
        return self.params.get(name)


class ParameterDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    annotations: list[Annotation] = []

    def annotation(self, name: str) -> Annotation | None:
        return _find_annotation(self.annotations, name)


class MethodDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    annotations: list[Annotation] = []
    doc: DocComment = Field(default_factory=DocComment)
    parameters: list[ParameterDecl] = []
    return_type: str = "void"

    def annotation(self, name: str) -> Annotation | None:
        return _find_annotation(self.annotations, name)


class ClassDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    qualified_name: str
    annotations: list[Annotation] = []
    doc: DocComment = Field(default_factory=DocComment)
    methods: list[MethodDecl] = []
    superclass: str | None = None

    def annotation(self, name: str) -> Annotation | None:
        return _find_annotation(self.annotations, name)


class CodeModel(BaseModel):
    """All declared classes of a source tree."""

    model_config = ConfigDict(frozen=True)

    classes: list[ClassDecl] = []

    _by_name: dict[str, ClassDecl] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        # a repeated qualified name resolves to its first declaration
        for cls in self.classes:
            self._by_name.setdefault(cls.qualified_name, cls)

    def find_class(self, qualified_name: str | None) -> ClassDecl | None:
        """Look up a declared class; None for unknown or external classes."""
        if not qualified_name:
            return None
        return self._by_name.get(qualified_name)

    def superclass_of(self, cls: ClassDecl) -> ClassDecl | None:
        return self.find_class(cls.superclass)


def _find_annotation(annotations: list[Annotation], name: str) -> Annotation | None:
    for annotation in annotations:
        if annotation.name == name:
            return annotation
    return None
